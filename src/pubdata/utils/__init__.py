"""Utility functions for pubdata.

This module provides hex input normalization and size calculation.
"""

from __future__ import annotations

from .hexstr import hex_to_bytes, hex_to_int, strip_hex_prefix, to_bytes, to_uint
from .sizing import field_sizes, pubdata_chunks, pubdata_size

__all__ = [
    # Hex normalization
    "strip_hex_prefix",
    "hex_to_bytes",
    "hex_to_int",
    "to_uint",
    "to_bytes",
    # Sizing functions
    "pubdata_size",
    "pubdata_chunks",
    "field_sizes",
]
