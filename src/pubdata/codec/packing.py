"""Packed float encoding for amounts and fees.

A packed value is a pair ``(exponent, mantissa)`` standing for
``mantissa * base ** exponent``. The exponent takes ``E`` bits and the mantissa
``M`` bits; amounts and fees each have their own ``(E, M, base)`` triple
(see ``pubdata.params``).

Packing truncates toward zero: the packed value is never larger than the
input, and the discarded remainder is always smaller than ``base ** exponent``.
Values above ``(2**M - 1) * base ** (2**E - 1)`` cannot be packed at all and
raise ``Unrepresentable``. Unpacking is total: every bit pattern is a valid
packed value.

Example:
    >>> p = pack(1_000_000_000_000_000_000, PackingRole.AMOUNT)
    >>> unpack(p, PackingRole.AMOUNT)
    1000000000000000000
    >>> pack_fee(12_345)
    b'\\x0c\\xd2'
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Union

from .. import params
from ..exceptions import EncodeError, SchemaError, TruncatedBuffer, Unrepresentable
from .bitpack import BitPacker, BitUnpacker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackingParams:
    """Bit widths and base of one packed float encoding.

    Attributes:
        exponent_bits: Width of the exponent sub-field (E)
        mantissa_bits: Width of the mantissa sub-field (M)
        base: Exponent base
    """

    exponent_bits: int
    mantissa_bits: int
    base: int = params.FLOAT_BASE

    def __post_init__(self) -> None:
        """Validate packing parameters."""
        if self.exponent_bits < 1:
            raise SchemaError(f"exponent_bits must be >= 1, got {self.exponent_bits}")
        if self.mantissa_bits < 1:
            raise SchemaError(f"mantissa_bits must be >= 1, got {self.mantissa_bits}")
        if self.base < 2:
            raise SchemaError(f"base must be >= 2, got {self.base}")

    @property
    def bit_width(self) -> int:
        return self.exponent_bits + self.mantissa_bits

    @property
    def byte_width(self) -> int:
        """Serialized size: ceil((E + M) / 8) bytes."""
        return (self.bit_width + 7) // 8

    @property
    def max_exponent(self) -> int:
        return (1 << self.exponent_bits) - 1

    @property
    def max_mantissa(self) -> int:
        return (1 << self.mantissa_bits) - 1

    @property
    def max_value(self) -> int:
        """Largest packable value: (2**M - 1) * base ** (2**E - 1)."""
        return self.max_mantissa * self.base**self.max_exponent


AMOUNT_PACKING = PackingParams(
    exponent_bits=params.AMOUNT_EXPONENT_BIT_WIDTH,
    mantissa_bits=params.AMOUNT_MANTISSA_BIT_WIDTH,
)

FEE_PACKING = PackingParams(
    exponent_bits=params.FEE_EXPONENT_BIT_WIDTH,
    mantissa_bits=params.FEE_MANTISSA_BIT_WIDTH,
)


class PackingRole(enum.Enum):
    """Which packed float encoding a field uses."""

    AMOUNT = "amount"
    FEE = "fee"

    @property
    def params(self) -> PackingParams:
        return AMOUNT_PACKING if self is PackingRole.AMOUNT else FEE_PACKING


RoleLike = Union[PackingRole, PackingParams]


@dataclass(frozen=True)
class PackedValue:
    """A packed float: ``mantissa * base ** exponent``."""

    exponent: int
    mantissa: int


def _resolve(role: RoleLike) -> PackingParams:
    if isinstance(role, PackingParams):
        return role
    if isinstance(role, PackingRole):
        return role.params
    raise TypeError(f"Expected PackingRole or PackingParams, got {type(role).__name__}")


def pack(value: int, role: RoleLike) -> PackedValue:
    """Pack an unsigned integer into a packed float.

    The smallest exponent whose mantissa fits in ``M`` bits is chosen, which
    keeps as many significant digits as the mantissa allows.

    Args:
        value: Unsigned integer to pack
        role: Packing role (or explicit parameters)

    Returns:
        PackedValue with ``mantissa * base ** exponent <= value``

    Raises:
        EncodeError: If value is not an integer
        Unrepresentable: If value is negative or above the packable maximum
    """
    p = _resolve(role)

    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(f"Packed value must be an int, got {type(value).__name__}")
    if value < 0:
        raise Unrepresentable(f"Cannot pack negative value {value}")
    if value > p.max_value:
        raise Unrepresentable(
            f"Value {value} exceeds packable maximum {p.max_value} "
            f"(exponent_bits={p.exponent_bits}, mantissa_bits={p.mantissa_bits}, base={p.base})"
        )

    exponent = 0
    mantissa = value
    while mantissa > p.max_mantissa:
        mantissa //= p.base
        exponent += 1

    if exponent and logger.isEnabledFor(logging.DEBUG):
        packed = mantissa * p.base**exponent
        if packed != value:
            logger.debug("Lossy pack: %d -> %d (lost %d)", value, packed, value - packed)

    return PackedValue(exponent=exponent, mantissa=mantissa)


def unpack(packed: PackedValue, role: RoleLike) -> int:
    """Expand a packed float back to an integer.

    Args:
        packed: Packed value
        role: Packing role (or explicit parameters)

    Returns:
        ``mantissa * base ** exponent``
    """
    p = _resolve(role)
    return packed.mantissa * p.base**packed.exponent


def pack_bytes(packed: PackedValue, role: RoleLike) -> bytes:
    """Serialize a packed value to ``ceil((E + M) / 8)`` big-endian bytes.

    The exponent occupies the high-order ``E`` bits and the mantissa the
    low-order ``M`` bits of the combined bitfield. Spare leading bits are zero.

    Raises:
        Unrepresentable: If exponent or mantissa exceed their bit widths
    """
    p = _resolve(role)

    packer = BitPacker()
    packer.write_zeros(p.byte_width * 8 - p.bit_width)
    try:
        packer.write_uint(packed.exponent, p.exponent_bits)
        packer.write_uint(packed.mantissa, p.mantissa_bits)
    except ValueError as err:
        raise Unrepresentable(f"Invalid packed value {packed}: {err}") from err

    return packer.to_bytes()


def unpack_bytes(data: bytes, role: RoleLike) -> PackedValue:
    """Parse a packed value serialized by :func:`pack_bytes`.

    Raises:
        TruncatedBuffer: If ``data`` is not exactly ``ceil((E + M) / 8)`` bytes
    """
    p = _resolve(role)

    if len(data) != p.byte_width:
        raise TruncatedBuffer(f"Packed value must be {p.byte_width} bytes, got {len(data)} bytes")

    unpacker = BitUnpacker(data)
    spare = p.byte_width * 8 - p.bit_width
    if spare:
        unpacker.read_uint(spare)
    exponent = unpacker.read_uint(p.exponent_bits)
    mantissa = unpacker.read_uint(p.mantissa_bits)
    return PackedValue(exponent=exponent, mantissa=mantissa)


def max_packable(role: RoleLike) -> int:
    """Return the largest value that can be packed for ``role``."""
    return _resolve(role).max_value


def is_packable(value: int, role: RoleLike) -> bool:
    """Check whether ``value`` packs without any precision loss."""
    try:
        return unpack(pack(value, role), role) == value
    except Unrepresentable:
        return False


def closest_packable(value: int, role: RoleLike) -> int:
    """Return the largest packable value not exceeding ``value``.

    Useful when a value is derived arithmetically (e.g. a sum of fees) and
    must be brought back onto the packable grid before encoding. Values above
    the packable maximum are capped to that maximum.

    Raises:
        Unrepresentable: If value is negative
    """
    p = _resolve(role)
    if value > p.max_value:
        return p.max_value
    return unpack(pack(value, p), p)


def pack_amount(value: int) -> bytes:
    """Pack a token amount straight to its serialized form."""
    return pack_bytes(pack(value, PackingRole.AMOUNT), PackingRole.AMOUNT)


def unpack_amount(data: bytes) -> int:
    return unpack(unpack_bytes(data, PackingRole.AMOUNT), PackingRole.AMOUNT)


def pack_fee(value: int) -> bytes:
    """Pack a fee straight to its serialized form."""
    return pack_bytes(pack(value, PackingRole.FEE), PackingRole.FEE)


def unpack_fee(data: bytes) -> int:
    return unpack(unpack_bytes(data, PackingRole.FEE), PackingRole.FEE)
