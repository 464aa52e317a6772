"""
GPIO capability used by the outlet controller.

The controller only needs to write and read an output level on a pin, so
anything with write_level/read_level/close can stand in for real hardware.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Protocol

import gpiozero

logger = logging.getLogger(__name__)


class GpioDriver(Protocol):
    def write_level(self, pin: int, high: bool) -> None:
        ...

    def read_level(self, pin: int) -> bool:
        ...

    def close(self) -> None:
        ...


class GpiozeroDriver:
    """
    GpioDriver backed by gpiozero.OutputDevice.

    One device is kept open per pin for the process lifetime so the pin keeps
    its level between requests. Devices are created with initial_value=None,
    which leaves the pin in whatever state it is found in.

    "high" always means "outlet on": with active_high=False (typical relay
    boards) gpiozero drives the pin LOW to turn the outlet on.
    """

    def __init__(self, active_high: bool = True, pin_factory: Optional[Any] = None):
        self.active_high = active_high
        self.pin_factory = pin_factory
        self._devices: Dict[int, gpiozero.OutputDevice] = {}
        self._devices_lock = threading.Lock()

    def _device(self, pin: int) -> gpiozero.OutputDevice:
        with self._devices_lock:
            dev = self._devices.get(pin)
            if dev is None:
                dev = gpiozero.OutputDevice(
                    pin,
                    active_high=self.active_high,
                    initial_value=None,
                    pin_factory=self.pin_factory,
                )
                self._devices[pin] = dev
                logger.debug("Opened GPIO BCM %s (active_high=%s)", pin, self.active_high)
            return dev

    def write_level(self, pin: int, high: bool) -> None:
        dev = self._device(pin)
        if high:
            dev.on()
        else:
            dev.off()

    def read_level(self, pin: int) -> bool:
        return bool(self._device(pin).value)

    def close(self) -> None:
        with self._devices_lock:
            devices = list(self._devices.items())
            self._devices.clear()

        for pin, dev in devices:
            try:
                dev.close()
            except Exception as e:
                logger.warning("Failed to release GPIO BCM %s: %s", pin, e)
