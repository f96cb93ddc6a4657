"""Public data codec for pubdata.

This module provides the packed float encoding for amounts and fees, the
per-kind field layouts, and the encode/decode functions built on them.
"""

from __future__ import annotations

from .decoder import decode, decode_any
from .encoder import encode
from .layout import LAYOUTS, FieldEncoding, FieldSpec, TransactionKind, TxLayout, get_layout
from .packing import (
    AMOUNT_PACKING,
    FEE_PACKING,
    PackedValue,
    PackingParams,
    PackingRole,
    closest_packable,
    is_packable,
    max_packable,
    pack,
    pack_amount,
    pack_bytes,
    pack_fee,
    unpack,
    unpack_amount,
    unpack_bytes,
    unpack_fee,
)

__all__ = [
    "encode",
    "decode",
    "decode_any",
    "LAYOUTS",
    "FieldEncoding",
    "FieldSpec",
    "TransactionKind",
    "TxLayout",
    "get_layout",
    "AMOUNT_PACKING",
    "FEE_PACKING",
    "PackedValue",
    "PackingParams",
    "PackingRole",
    "pack",
    "unpack",
    "pack_bytes",
    "unpack_bytes",
    "pack_amount",
    "unpack_amount",
    "pack_fee",
    "unpack_fee",
    "max_packable",
    "is_packable",
    "closest_packable",
]
