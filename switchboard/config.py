from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def _get_bool(name: str, default: bool) -> bool:
    val = os.getenv(name, "").strip().lower()
    if val == "":
        return default
    if val in _TRUTHY:
        return True
    if val in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean, got {val!r}")


def _get_int(name: str, default: int) -> int:
    val = os.getenv(name)
    return default if val is None or val == "" else int(val)


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"


def server_config_from_env() -> ServerConfig:
    return ServerConfig(
        host=os.getenv("SWITCHBOARD_WEB_HOST", "0.0.0.0"),
        port=_get_int("SWITCHBOARD_WEB_PORT", 8000),
        debug=_get_bool("SWITCHBOARD_WEB_DEBUG", False),
        log_level=os.getenv("SWITCHBOARD_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


@dataclass(frozen=True)
class OutletWiring:
    # BCM pin numbers in outlet declaration order
    pins: Tuple[int, ...] = (4, 22, 6, 26)
    first_id: int = 0
    active_high: bool = True
    simulation: bool = False
    probe_state: bool = True


def parse_pins(raw: str) -> Tuple[int, ...]:
    """
    Parse a comma separated list of BCM pin numbers, e.g. "4,22,6,26".

    Raises ValueError for empty lists, negative or duplicate pins.
    """
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    if not parts:
        raise ValueError("at least one outlet pin must be configured")

    pins = tuple(int(p) for p in parts)
    for pin in pins:
        if pin < 0:
            raise ValueError(f"invalid pin number {pin}")
    if len(set(pins)) != len(pins):
        raise ValueError(f"duplicate pin in {raw!r}")
    return pins


def outlet_wiring_from_env() -> OutletWiring:
    """
    Allow overriding the outlet wiring without changing code.
    Useful when wiring differs between installations.
    """
    raw_pins = os.getenv("SWITCHBOARD_PINS", "")
    pins = parse_pins(raw_pins) if raw_pins.strip() else OutletWiring.pins

    first_id = _get_int("SWITCHBOARD_FIRST_ID", 0)
    if first_id < 0:
        raise ValueError(f"SWITCHBOARD_FIRST_ID must be non-negative, got {first_id}")

    return OutletWiring(
        pins=pins,
        first_id=first_id,
        active_high=_get_bool("SWITCHBOARD_ACTIVE_HIGH", True),
        simulation=_get_bool("SWITCHBOARD_SIMULATION", False),
        probe_state=_get_bool("SWITCHBOARD_PROBE_STATE", True),
    )
