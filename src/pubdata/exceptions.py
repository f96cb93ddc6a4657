"""Exception hierarchy for pubdata.

All exceptions inherit from PubdataError so callers can catch any
pubdata-specific failure in one place. Encoding can fail on out-of-range or
malformed input; decoding a buffer of the right length never fails on its
numeric contents.
"""

from __future__ import annotations


class PubdataError(Exception):
    """Base exception for all pubdata errors."""

    pass


class SchemaError(PubdataError):
    """Raised when a layout table or packing configuration is inconsistent.

    Examples:
        - Field widths do not add up to the declared public data length
        - Packed field width does not match its role's bit widths
        - Invalid exponent/mantissa widths or base
    """

    pass


class EncodeError(PubdataError):
    """Raised when encoding public data fails.

    Examples:
        - Field value has the wrong type
        - Negative numeric value
    """

    pass


class FieldError(EncodeError):
    """Encoding error attributed to a single named field."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class Unrepresentable(FieldError):
    """Raised when a value exceeds the range of a packed float encoding."""

    pass


class FieldOverflow(FieldError):
    """Raised when a value does not fit the fixed byte width of its field."""

    pass


class MissingField(FieldError):
    """Raised when a field required by the layout was not supplied."""

    pass


class UnexpectedField(FieldError):
    """Raised when a supplied field is not part of the layout."""

    pass


class InvalidHex(EncodeError, ValueError):
    """Raised when a hex string is malformed.

    Examples:
        - Odd number of hex digits
        - Characters outside [0-9a-fA-F]
    """

    pass


class DecodeError(PubdataError):
    """Raised when decoding public data fails.

    Examples:
        - Opcode byte does not match the requested kind
        - Unknown opcode
        - Non-zero bytes in a padding segment
    """

    pass


class TruncatedBuffer(DecodeError):
    """Raised when a buffer length differs from the fixed layout width."""

    pass
