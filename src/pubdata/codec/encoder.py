"""Public data encoder.

This module provides the encode() function that serializes the field values of
one transaction into its fixed-layout public data buffer.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, TypeVar

from ..exceptions import (
    EncodeError,
    FieldError,
    FieldOverflow,
    InvalidHex,
    MissingField,
    UnexpectedField,
    Unrepresentable,
)
from ..utils.hexstr import to_bytes, to_uint
from .bitpack import BitPacker
from .layout import FieldEncoding, FieldSpec, TransactionKind, TxLayout, get_layout
from .packing import pack, pack_bytes

logger = logging.getLogger(__name__)

T = TypeVar("T")


def encode(kind: TransactionKind | int, fields: Mapping[str, Any]) -> bytes:
    """Encode transaction fields to public data.

    Fields are written in layout order. Numeric fields accept ``int`` or hex
    strings, address fields accept ``bytes`` or hex strings. The output
    length depends only on ``kind``.

    Args:
        kind: Transaction kind (or its opcode)
        fields: Mapping of field name to value; opcode and padding are implied

    Returns:
        Public data bytes, exactly ``get_layout(kind).total_width`` long

    Raises:
        MissingField: If a required field is absent
        UnexpectedField: If a field is not part of the layout
        FieldOverflow: If a raw or address value is too wide for its field
        Unrepresentable: If a packed value exceeds its packing range
        InvalidHex: If a hex string is malformed
        EncodeError: If a value has the wrong type or is negative

    Examples:
        ```python
        from pubdata import TransactionKind, encode

        data = encode(
            TransactionKind.WITHDRAW,
            {"token": 0, "amount": "0x0de0b6b3a7640000", "fee": 0, "address": eth_address},
        )
        assert len(data) == 48
        ```
    """
    layout = get_layout(kind)

    allowed = {field.name for field in layout.input_fields}
    unexpected = sorted(name for name in fields if name not in allowed)
    if unexpected:
        raise UnexpectedField(
            f"{layout.kind.name} has no field(s) {unexpected}; expected {sorted(allowed)}",
            field=unexpected[0],
        )

    packer = BitPacker()
    for field_spec in layout.fields:
        _encode_field(packer, layout, field_spec, fields)

    encoded = packer.to_bytes()
    if len(encoded) != layout.total_width:
        raise EncodeError(
            f"{layout.kind.name}: encoded {len(encoded)} bytes, layout requires "
            f"{layout.total_width}"
        )

    logger.debug("Encoded %s public data (%d bytes)", layout.kind.name, len(encoded))
    return encoded


def _normalize(field_spec: FieldSpec, convert: Callable[[Any], T], value: Any) -> T:
    """Run an input normalizer, attributing failures to the field."""
    try:
        return convert(value)
    except InvalidHex as err:
        raise InvalidHex(f"Field {field_spec.name}: {err}") from err
    except FieldError:
        raise
    except EncodeError as err:
        raise EncodeError(f"Field {field_spec.name}: {err}") from err


def _encode_field(
    packer: BitPacker, layout: TxLayout, field_spec: FieldSpec, fields: Mapping[str, Any]
) -> None:
    """Encode a single field.

    Args:
        packer: BitPacker to write to
        layout: Layout being encoded
        field_spec: Field to encode
        fields: Caller-supplied values
    """
    if field_spec.encoding is FieldEncoding.OPCODE:
        packer.write_uint(layout.opcode, field_spec.bits)
        return

    if field_spec.encoding is FieldEncoding.PADDING:
        packer.write_zeros(field_spec.bits)
        return

    value = fields.get(field_spec.name)
    if value is None:
        value = field_spec.default
    if value is None:
        raise MissingField(
            f"{layout.kind.name}: missing required field {field_spec.name}",
            field=field_spec.name,
        )

    if field_spec.encoding is FieldEncoding.RAW_UINT:
        number = _normalize(field_spec, to_uint, value)
        if number > field_spec.max_value:
            needed = (number.bit_length() + 7) // 8
            raise FieldOverflow(
                f"Field {field_spec.name}: value {number} needs {needed} bytes, "
                f"field is {field_spec.width} bytes",
                field=field_spec.name,
            )
        packer.write_uint(number, field_spec.bits)
        return

    if field_spec.encoding is FieldEncoding.PACKED:
        assert field_spec.role is not None
        number = _normalize(field_spec, to_uint, value)
        try:
            packed = pack(number, field_spec.role)
        except Unrepresentable as err:
            raise Unrepresentable(f"Field {field_spec.name}: {err}", field=field_spec.name) from err
        packer.write_bytes(pack_bytes(packed, field_spec.role))
        return

    if field_spec.encoding is FieldEncoding.ADDRESS:
        raw = _normalize(field_spec, to_bytes, value)
        if len(raw) > field_spec.width:
            raise FieldOverflow(
                f"Field {field_spec.name}: expected at most {field_spec.width} bytes, "
                f"got {len(raw)} bytes",
                field=field_spec.name,
            )
        # Short addresses are left-padded like big-endian quantities
        packer.write_bytes(raw.rjust(field_spec.width, b"\x00"))
        return

    raise EncodeError(f"Field {field_spec.name}: unsupported encoding {field_spec.encoding}")
