"""
Outlet registry and controller.

The registry owns the fixed, ordered list of outlets and a single lock that
serializes every read and write. The controller is the only path by which an
outlet's cached `active` flag changes: it drives the pin first and updates the
cache only once the write has succeeded.

Holding one registry-wide lock also serializes commands on unrelated outlets.
With a handful of relays that is acceptable.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional

from switchboard.errors import HardwareWriteFailed, UnknownOutlet
from switchboard.hardware.gpio import GpioDriver

logger = logging.getLogger(__name__)


@dataclass
class Outlet:
    id: int
    pin: Optional[int] = None
    active: bool = False

    def to_dict(self) -> Dict[str, Any]:
        # Key order matters for the wire format: id, pin (if bound), active.
        data: Dict[str, Any] = {"id": self.id}
        if self.pin is not None:
            data["pin"] = self.pin
        data["active"] = self.active
        return data


class OutletRegistry:
    def __init__(self, outlets: Iterable[Outlet], gpio: Optional[GpioDriver] = None):
        self._outlets: List[Outlet] = list(outlets)
        ids = [o.id for o in self._outlets]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate outlet id in {ids}")

        # Reentrant so find()/list() can be used while a command holds the lock.
        self._lock = threading.RLock()
        self.controller = OutletController(self, gpio)

    @classmethod
    def from_outputs(
        cls,
        outputs: Iterable[Dict[str, Any]],
        gpio: Optional[GpioDriver] = None,
        probe_state: bool = True,
    ) -> "OutletRegistry":
        """
        Build the registry from the wiring table (see hardware.outputs.get_outputs).

        When probe_state is set, each bound outlet starts with the level read
        back from its pin; otherwise, or if the probe fails, it starts inactive.
        """
        outlets = []
        for o in outputs:
            pin = o.get("pin_bcm")
            active = False
            if probe_state and pin is not None and gpio is not None:
                try:
                    active = gpio.read_level(pin)
                except Exception as e:
                    logger.warning("Could not read initial state of BCM %s, assuming off: %s", pin, e)
            outlets.append(Outlet(id=int(o["id"]), pin=pin, active=bool(active)))
        return cls(outlets, gpio)

    @contextmanager
    def locked(self) -> Iterator["OutletRegistry"]:
        with self._lock:
            yield self

    def list(self) -> List[Outlet]:
        """Consistent snapshot of every outlet, in registry order."""
        with self._lock:
            return [replace(o) for o in self._outlets]

    def find(self, outlet_id: int) -> Optional[Outlet]:
        """
        Return the live outlet slot for outlet_id, or None.

        The returned object is shared; mutate it only while holding locked().
        """
        with self._lock:
            for o in self._outlets:
                if o.id == outlet_id:
                    return o
        return None

    def set_active(self, outlet_id: int, desired: bool) -> Outlet:
        return self.controller.command_outlet(outlet_id, desired)


class OutletController:
    def __init__(self, registry: OutletRegistry, gpio: Optional[GpioDriver] = None):
        self.registry = registry
        self.gpio = gpio

    def command_outlet(self, outlet_id: int, desired: bool) -> Outlet:
        """
        Drive an outlet on or off and update its cached state.

        Returns a snapshot of the outlet after the change.

        Raises:
            UnknownOutlet: no outlet has this id; nothing is touched.
            HardwareWriteFailed: the pin write failed; the cached state keeps
                its previous value.
        """
        with self.registry.locked():
            outlet = self.registry.find(outlet_id)
            if outlet is None:
                raise UnknownOutlet(outlet_id)

            if outlet.pin is not None:
                if self.gpio is None:
                    raise HardwareWriteFailed(
                        outlet.id, outlet.pin, RuntimeError("no GPIO driver configured")
                    )
                try:
                    self.gpio.write_level(outlet.pin, desired)
                except Exception as e:
                    raise HardwareWriteFailed(outlet.id, outlet.pin, e) from e

            outlet.active = desired
            logger.info("Outlet %s (pin %s) => %s", outlet.id, outlet.pin, "ON" if desired else "OFF")
            return replace(outlet)
