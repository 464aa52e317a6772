"""
Switchboard package.

HTTP-controlled manager for a small fixed set of GPIO-backed relay outlets.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
