"""Hex string normalization.

Amounts and addresses often arrive as ``0x``-prefixed hex strings. These
helpers turn them into integers and bytes before they reach the codec, so the
codec itself only ever sees ``int`` and ``bytes``.
"""

from __future__ import annotations

import string
from typing import Union

from ..exceptions import EncodeError, InvalidHex

_HEX_DIGITS = frozenset(string.hexdigits)

UIntLike = Union[int, str]
BytesLike = Union[bytes, bytearray, memoryview, str]


def strip_hex_prefix(value: str) -> str:
    """Remove a leading ``0x``/``0X`` if present.

    Example:
        >>> strip_hex_prefix("0xdeadbeef")
        'deadbeef'
    """
    if value[:2] in ("0x", "0X"):
        return value[2:]
    return value


def hex_to_bytes(value: str) -> bytes:
    """Convert a hex string (with or without ``0x``) to bytes.

    Raises:
        InvalidHex: If the string has an odd number of digits or non-hex characters
    """
    digits = strip_hex_prefix(value)
    if len(digits) % 2:
        raise InvalidHex(f"Hex string has odd length ({len(digits)} digits): {value!r}")
    if not _HEX_DIGITS.issuperset(digits):
        raise InvalidHex(f"Invalid hex string: {value!r}")
    return bytes.fromhex(digits)


def hex_to_int(value: str) -> int:
    """Convert a big-endian hex string to an unsigned integer.

    An empty string (or a bare ``0x``) is zero.
    """
    return int.from_bytes(hex_to_bytes(value), "big")


def to_uint(value: UIntLike) -> int:
    """Normalize an integer or hex string to a non-negative ``int``.

    Raises:
        EncodeError: If value is negative or of an unsupported type
        InvalidHex: If value is a malformed hex string
    """
    if isinstance(value, str):
        return hex_to_int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(f"Expected int or hex string, got {type(value).__name__}")
    if value < 0:
        raise EncodeError(f"Expected non-negative value, got {value}")
    return value


def to_bytes(value: BytesLike) -> bytes:
    """Normalize bytes-like or hex string input to ``bytes``."""
    if isinstance(value, str):
        return hex_to_bytes(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise EncodeError(f"Expected bytes or hex string, got {type(value).__name__}")
