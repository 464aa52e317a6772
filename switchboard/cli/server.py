from __future__ import annotations

import logging
from typing import Optional

from flask import Flask

from switchboard.config import (OutletWiring, ServerConfig,
                                outlet_wiring_from_env, server_config_from_env)
from switchboard.hardware.gpio import GpioDriver, GpiozeroDriver
from switchboard.hardware.outputs import get_outputs
from switchboard.registry import OutletRegistry
from switchboard.web.app import create_app

logger = logging.getLogger(__name__)


def build_registry(wiring: OutletWiring, gpio: Optional[GpioDriver] = None) -> OutletRegistry:
    if gpio is None and not wiring.simulation:
        gpio = GpiozeroDriver(active_high=wiring.active_high)

    registry = OutletRegistry.from_outputs(get_outputs(wiring), gpio=gpio, probe_state=wiring.probe_state)
    for outlet in registry.list():
        logger.info(
            "Outlet %s: pin %s, %s",
            outlet.id,
            outlet.pin if outlet.pin is not None else "(simulated)",
            "ON" if outlet.active else "OFF",
        )
    return registry


def build_app() -> Flask:
    """Entry point for WSGI servers, e.g. gunicorn 'switchboard.cli.server:build_app()'."""
    return create_app(build_registry(outlet_wiring_from_env()))


def main(server: Optional[ServerConfig] = None, wiring: Optional[OutletWiring] = None) -> None:
    server = server or server_config_from_env()
    logging.basicConfig(level=server.log_level, format="[%(levelname)s] %(name)s: %(message)s")
    wiring = wiring or outlet_wiring_from_env()

    registry = build_registry(wiring)
    app = create_app(registry)

    logger.info("Now listening on %s:%s", server.host, server.port)
    try:
        app.run(host=server.host, port=server.port, debug=server.debug, threaded=True, use_reloader=False)
    finally:
        gpio = registry.controller.gpio
        if gpio is not None:
            gpio.close()


if __name__ == "__main__":
    main()
