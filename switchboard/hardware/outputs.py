"""
Outlet wiring table shared by the registry and the server entry point.

Keep this module free of Raspberry Pi specific imports (gpiozero, RPi.GPIO, etc)
so it can be safely imported on non-RPi machines.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from switchboard.config import OutletWiring, outlet_wiring_from_env


def get_outputs(wiring: Optional[OutletWiring] = None) -> List[Dict[str, Any]]:
    """
    Return one entry per outlet, in declaration order.

    Ids are assigned sequentially from wiring.first_id. In simulation mode
    there is no hardware binding, so pin_bcm is None.
    """
    if wiring is None:
        wiring = outlet_wiring_from_env()

    return [
        {
            "id": wiring.first_id + index,
            "pin_bcm": None if wiring.simulation else pin,
        }
        for index, pin in enumerate(wiring.pins)
    ]

