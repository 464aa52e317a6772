from flask import Flask

import switchboard.cli.server as server_module
from switchboard.config import OutletWiring, ServerConfig

from tests.fakes import FakeGpio


def test_build_registry_simulation():
    registry = server_module.build_registry(OutletWiring(pins=(4, 22, 6), simulation=True))
    assert [o.to_dict() for o in registry.list()] == [
        {"id": 0, "active": False},
        {"id": 1, "active": False},
        {"id": 2, "active": False},
    ]
    assert registry.controller.gpio is None
    registry.set_active(1, True)
    assert registry.find(1).active is True


def test_build_registry_probes_hardware():
    gpio = FakeGpio({26: True})
    registry = server_module.build_registry(OutletWiring(first_id=1), gpio=gpio)
    assert [(o.id, o.pin, o.active) for o in registry.list()] == [
        (1, 4, False),
        (2, 22, False),
        (3, 6, False),
        (4, 26, True),
    ]


def test_main_runs_threaded_server_and_releases_gpio(monkeypatch):
    gpio = FakeGpio()
    calls = []
    monkeypatch.setattr(server_module, "GpiozeroDriver", lambda active_high: gpio)
    monkeypatch.setattr(Flask, "run", lambda self, **kwargs: calls.append(kwargs))

    server_module.main(ServerConfig(host="127.0.0.1", port=8123), OutletWiring())

    assert calls == [{"host": "127.0.0.1", "port": 8123, "debug": False, "threaded": True, "use_reloader": False}]
    assert gpio.closed is True
