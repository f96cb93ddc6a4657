"""Bit-level packing and unpacking utilities.

This module provides low-level bit manipulation for fixed-layout public data.
All operations are deterministic and big-endian: the first bit written is the
most significant bit of the first byte.
"""

from __future__ import annotations


class BitPacker:
    """Packs values bit-by-bit into a byte buffer.

    Bits accumulate in a single Python integer, so fields of any width
    (including 128-bit raw amounts) can be written.

    Example:
        >>> packer = BitPacker()
        >>> packer.write_uint(0x01, num_bits=8)
        >>> packer.write_uint(5, num_bits=16)
        >>> data = packer.to_bytes()
    """

    def __init__(self) -> None:
        """Initialize an empty bit packer."""
        self._value = 0
        self._length = 0

    def write_uint(self, value: int, num_bits: int) -> None:
        """Write an unsigned integer using the specified number of bits.

        Args:
            value: Unsigned integer value to write (must be >= 0)
            num_bits: Number of bits to use for encoding (>= 1)

        Raises:
            ValueError: If value is negative or doesn't fit in num_bits
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        if num_bits < 1:
            raise ValueError(f"num_bits must be >= 1, got {num_bits}")

        max_value = (1 << num_bits) - 1
        if value > max_value:
            raise ValueError(f"Value {value} requires more than {num_bits} bits (max: {max_value})")

        self._value = (self._value << num_bits) | value
        self._length += num_bits

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes.

        Args:
            data: Bytes to write
        """
        if data:
            self.write_uint(int.from_bytes(data, "big"), len(data) * 8)

    def write_zeros(self, num_bits: int) -> None:
        """Write ``num_bits`` zero bits."""
        if num_bits < 0:
            raise ValueError(f"num_bits must be >= 0, got {num_bits}")
        self._value <<= num_bits
        self._length += num_bits

    def bit_length(self) -> int:
        """Return the current number of bits written.

        Returns:
            Number of bits in the buffer
        """
        return self._length

    def to_bytes(self) -> bytes:
        """Convert the bit buffer to bytes.

        If the number of bits is not a multiple of 8, the last byte
        is padded with zeros on the right (LSB side).

        Returns:
            Packed bytes
        """
        if not self._length:
            return b""

        pad = (-self._length) % 8
        return (self._value << pad).to_bytes((self._length + pad) // 8, "big")


class BitUnpacker:
    """Unpacks values bit-by-bit from a byte buffer.

    Example:
        >>> unpacker = BitUnpacker(data)
        >>> opcode = unpacker.read_uint(8)
        >>> token = unpacker.read_uint(16)
    """

    def __init__(self, data: bytes) -> None:
        """Initialize a bit unpacker with the given data.

        Args:
            data: Byte buffer to unpack
        """
        self._value = int.from_bytes(data, "big")
        self._length = len(data) * 8
        self._position = 0

    def read_uint(self, num_bits: int) -> int:
        """Read an unsigned integer of the specified bit width.

        Args:
            num_bits: Number of bits to read (>= 1)

        Returns:
            Unsigned integer value

        Raises:
            ValueError: If num_bits is out of range
            IndexError: If not enough bits are available
        """
        if num_bits < 1:
            raise ValueError(f"num_bits must be >= 1, got {num_bits}")

        if self._position + num_bits > self._length:
            raise IndexError(
                f"Not enough bits: need {num_bits}, have {self._length - self._position}"
            )

        shift = self._length - self._position - num_bits
        self._position += num_bits
        return (self._value >> shift) & ((1 << num_bits) - 1)

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read raw bytes.

        Args:
            num_bytes: Number of bytes to read

        Returns:
            Bytes read from buffer

        Raises:
            IndexError: If not enough bytes are available
        """
        if num_bytes == 0:
            return b""
        return self.read_uint(num_bytes * 8).to_bytes(num_bytes, "big")

    def bits_remaining(self) -> int:
        """Return the number of bits remaining in the buffer.

        Returns:
            Number of unread bits
        """
        return self._length - self._position

    def position(self) -> int:
        """Return the current bit position."""
        return self._position
