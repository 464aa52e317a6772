"""
Outlet errors.

Every failure of an outlet command is an OutletError. The web layer maps
InvalidOutletId subclasses to "Invalid id!" and HardwareWriteFailed to "Error!".
"""

from __future__ import annotations

from typing import Optional


class OutletError(Exception):
    """Base exception for outlet operations."""


class InvalidOutletId(OutletError):
    """The request did not name an existing outlet."""


class MissingParameter(InvalidOutletId):
    """Raised when the required 'id' parameter is absent."""

    def __init__(self, name: str = "id"):
        super().__init__(f"missing '{name}' parameter")
        self.name = name


class MalformedParameter(InvalidOutletId):
    """Raised when 'id' is present but not a non-negative integer."""

    def __init__(self, raw: str, name: str = "id"):
        super().__init__(f"'{name}' must be a non-negative integer, got {raw!r}")
        self.name = name
        self.raw = raw


class UnknownOutlet(InvalidOutletId):
    """Raised when no outlet has the requested id."""

    def __init__(self, outlet_id: int):
        super().__init__(f"outlet {outlet_id} not found")
        self.outlet_id = outlet_id


class HardwareWriteFailed(OutletError):
    """Raised when the GPIO write for an outlet fails. The cached state is untouched."""

    def __init__(self, outlet_id: int, pin: Optional[int], cause: BaseException):
        super().__init__(f"failed to drive pin {pin} for outlet {outlet_id}: {cause}")
        self.outlet_id = outlet_id
        self.pin = pin
        self.cause = cause
