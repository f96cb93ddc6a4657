"""Public data decoder.

This module provides decode() and decode_any(), which split a public data
buffer back into its field values. Packed fields decode to the value the
packed form represents, which may be smaller than the value originally passed
to encode().
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple, Union

from ..exceptions import DecodeError, TruncatedBuffer
from .bitpack import BitUnpacker
from .layout import FieldEncoding, FieldSpec, TransactionKind, TxLayout, get_layout
from .packing import unpack, unpack_bytes

logger = logging.getLogger(__name__)

FieldValue = Union[int, bytes]


def decode(kind: TransactionKind | int, buffer: bytes) -> Dict[str, FieldValue]:
    """Decode public data for a known transaction kind.

    Args:
        kind: Transaction kind (or its opcode)
        buffer: Public data bytes

    Returns:
        Mapping of field name to value in layout order. Numeric fields are
        ``int``, address fields are ``bytes``. Opcode and padding are omitted.

    Raises:
        TruncatedBuffer: If ``len(buffer)`` differs from the layout width
        DecodeError: If the opcode byte does not match ``kind``

    Examples:
        ```python
        from pubdata import TransactionKind, decode

        fields = decode(TransactionKind.DEPOSIT, data)
        print(fields["token"], fields["amount"], fields["address"].hex())
        ```
    """
    layout = get_layout(kind)
    data = bytes(buffer)

    if len(data) != layout.total_width:
        raise TruncatedBuffer(
            f"{layout.kind.name} public data must be {layout.total_width} bytes, "
            f"got {len(data)} bytes"
        )

    unpacker = BitUnpacker(data)
    values: Dict[str, FieldValue] = {}
    for field_spec in layout.fields:
        value = _decode_field(unpacker, layout, field_spec)
        if field_spec.is_input:
            values[field_spec.name] = value

    logger.debug("Decoded %s public data (%d bytes)", layout.kind.name, len(data))
    return values


def decode_any(buffer: bytes) -> Tuple[TransactionKind, Dict[str, FieldValue]]:
    """Decode public data of any kind, dispatching on the opcode byte.

    Returns:
        Tuple of (kind, fields)

    Raises:
        TruncatedBuffer: If the buffer is empty or has the wrong length for its kind
        DecodeError: If the opcode is unknown
    """
    if not buffer:
        raise TruncatedBuffer("Cannot decode empty public data")

    opcode = buffer[0]
    try:
        kind = TransactionKind(opcode)
    except ValueError as err:
        known = [f"0x{k.opcode:02x}" for k in TransactionKind]
        raise DecodeError(f"Unknown opcode 0x{opcode:02x}. Known opcodes: {known}") from err

    return kind, decode(kind, buffer)


def _decode_field(unpacker: BitUnpacker, layout: TxLayout, field_spec: FieldSpec) -> FieldValue:
    """Decode a single field value.

    Args:
        unpacker: BitUnpacker to read from
        layout: Layout being decoded
        field_spec: Field to decode

    Returns:
        Decoded field value
    """
    if field_spec.encoding is FieldEncoding.OPCODE:
        opcode = unpacker.read_uint(field_spec.bits)
        if opcode != layout.opcode:
            raise DecodeError(
                f"Opcode mismatch: got 0x{opcode:02x}, expected 0x{layout.opcode:02x} "
                f"for {layout.kind.name}"
            )
        return opcode

    if field_spec.encoding is FieldEncoding.PADDING:
        # Padding content is not part of the operation
        return unpacker.read_uint(field_spec.bits)

    if field_spec.encoding is FieldEncoding.RAW_UINT:
        return unpacker.read_uint(field_spec.bits)

    if field_spec.encoding is FieldEncoding.PACKED:
        assert field_spec.role is not None
        raw = unpacker.read_bytes(field_spec.width)
        return unpack(unpack_bytes(raw, field_spec.role), field_spec.role)

    if field_spec.encoding is FieldEncoding.ADDRESS:
        return unpacker.read_bytes(field_spec.width)

    raise DecodeError(f"Field {field_spec.name}: unsupported encoding {field_spec.encoding}")
