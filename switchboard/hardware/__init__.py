"""
Hardware-related modules (outlet wiring, GPIO driver).

Keep these modules import-safe on non-Raspberry Pi machines whenever possible.
"""

from __future__ import annotations
