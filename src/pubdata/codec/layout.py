"""Public data layouts for every transaction kind.

Each transaction kind maps to exactly one ordered list of fixed-width fields.
The table is built once at import time, validated, and exposed read-only.

Example:
    >>> layout = get_layout(TransactionKind.DEPOSIT)
    >>> layout.total_width
    48
    >>> [f.name for f in layout.fields]
    ['opcode', 'account_id', 'token', 'amount', 'address', 'padding']
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .. import params
from ..exceptions import SchemaError
from .packing import PackingRole


class TransactionKind(enum.IntEnum):
    """Rollup operation kinds; the value is the opcode byte."""

    NOOP = 0x00
    DEPOSIT = 0x01
    TRANSFER_TO_NEW = 0x02
    WITHDRAW = 0x03
    CLOSE = 0x04
    TRANSFER = 0x05
    FULL_EXIT = 0x06

    @property
    def opcode(self) -> int:
        return int(self)


class FieldEncoding(enum.Enum):
    """How a field's value is turned into bytes."""

    OPCODE = "opcode"
    RAW_UINT = "raw_uint"
    PACKED = "packed"
    PADDING = "padding"
    ADDRESS = "address"


@dataclass(frozen=True)
class FieldSpec:
    """One fixed-width segment of a public data layout.

    Attributes:
        name: Field name used in the encode/decode mapping
        width: Width in bytes
        encoding: How the value is serialized
        role: Packing role, only for PACKED fields
        default: Value used when the caller omits the field (None = required)
    """

    name: str
    width: int
    encoding: FieldEncoding
    role: Optional[PackingRole] = None
    default: Optional[int] = None

    @property
    def bits(self) -> int:
        return self.width * 8

    @property
    def is_input(self) -> bool:
        """Whether callers supply a value for this field."""
        return self.encoding not in (FieldEncoding.OPCODE, FieldEncoding.PADDING)

    @property
    def required(self) -> bool:
        return self.is_input and self.default is None

    @property
    def max_value(self) -> int:
        """Largest integer a RAW_UINT field of this width can hold."""
        return (1 << self.bits) - 1


class TxLayout:
    """Ordered field layout of one transaction kind.

    Example:
        >>> layout = get_layout(TransactionKind.WITHDRAW)
        >>> for field in layout.fields:
        ...     print(f"{field.name}: {field.width} bytes")
    """

    def __init__(self, kind: TransactionKind, fields: List[FieldSpec], total_width: int) -> None:
        self.kind = kind
        self.fields: Tuple[FieldSpec, ...] = tuple(fields)
        self.total_width = total_width
        self._validate()

    def _validate(self) -> None:
        width = sum(field.width for field in self.fields)
        if width != self.total_width:
            raise SchemaError(
                f"{self.kind.name}: field widths add up to {width} bytes, "
                f"declared {self.total_width}"
            )
        if self.total_width % params.CHUNK_BYTES:
            raise SchemaError(
                f"{self.kind.name}: {self.total_width} bytes is not a whole number of "
                f"{params.CHUNK_BYTES}-byte chunks"
            )
        if not self.fields or self.fields[0].encoding is not FieldEncoding.OPCODE:
            raise SchemaError(f"{self.kind.name}: layout must start with the opcode")

        names = [field.name for field in self.fields]
        if len(set(names)) != len(names):
            raise SchemaError(f"{self.kind.name}: duplicate field names in {names}")

        for field in self.fields:
            if field.width < 1:
                raise SchemaError(f"{self.kind.name}.{field.name}: width must be >= 1")
            if field.encoding is FieldEncoding.PACKED:
                if field.role is None:
                    raise SchemaError(f"{self.kind.name}.{field.name}: packed field needs a role")
                if field.width != field.role.params.byte_width:
                    raise SchemaError(
                        f"{self.kind.name}.{field.name}: {field.width} bytes, "
                        f"but {field.role.value} packing needs {field.role.params.byte_width}"
                    )

    @property
    def opcode(self) -> int:
        return self.kind.opcode

    @property
    def total_bits(self) -> int:
        return self.total_width * 8

    @property
    def chunks(self) -> int:
        return self.total_width // params.CHUNK_BYTES

    @property
    def input_fields(self) -> Tuple[FieldSpec, ...]:
        """Fields whose values come from the caller, in layout order."""
        return tuple(field for field in self.fields if field.is_input)

    def field(self, name: str) -> FieldSpec:
        for field in self.fields:
            if field.name == name:
                return field
        raise KeyError(f"{self.kind.name} has no field {name!r}")

    def __repr__(self) -> str:
        return f"TxLayout({self.kind.name}, {self.total_width} bytes)"


def _opcode() -> FieldSpec:
    return FieldSpec("opcode", params.OPCODE_BYTES, FieldEncoding.OPCODE)


def _account(name: str, default: Optional[int] = None) -> FieldSpec:
    return FieldSpec(name, params.ACCOUNT_ID_BYTES, FieldEncoding.RAW_UINT, default=default)


def _token() -> FieldSpec:
    return FieldSpec("token", params.TOKEN_BYTES, FieldEncoding.RAW_UINT)


def _raw_amount() -> FieldSpec:
    return FieldSpec("amount", params.RAW_AMOUNT_BYTES, FieldEncoding.RAW_UINT)


def _packed(name: str, role: PackingRole) -> FieldSpec:
    return FieldSpec(name, role.params.byte_width, FieldEncoding.PACKED, role=role)


def _address(name: str = "address") -> FieldSpec:
    return FieldSpec(name, params.ADDRESS_BYTES, FieldEncoding.ADDRESS)


def _padding(width: int) -> FieldSpec:
    return FieldSpec("padding", width, FieldEncoding.PADDING)


def _build_layouts() -> Mapping[TransactionKind, TxLayout]:
    layouts = [
        TxLayout(TransactionKind.NOOP, [_opcode(), _padding(7)], 8),
        TxLayout(
            TransactionKind.DEPOSIT,
            [_opcode(), _account("account_id", default=0), _token(), _raw_amount(),
             _address(), _padding(6)],
            48,
        ),
        TxLayout(
            TransactionKind.TRANSFER_TO_NEW,
            [_opcode(), _account("from_account"), _token(),
             _packed("amount", PackingRole.AMOUNT), _address("to_address"),
             _account("to_account"), _packed("fee", PackingRole.FEE), _padding(4)],
            40,
        ),
        TxLayout(
            TransactionKind.WITHDRAW,
            [_opcode(), _account("account_id", default=0), _token(), _raw_amount(),
             _packed("fee", PackingRole.FEE), _address(), _padding(4)],
            48,
        ),
        TxLayout(TransactionKind.CLOSE, [_opcode(), _account("account_id"), _padding(4)], 8),
        TxLayout(
            TransactionKind.TRANSFER,
            [_opcode(), _account("from_account"), _token(), _account("to_account"),
             _packed("amount", PackingRole.AMOUNT), _packed("fee", PackingRole.FEE)],
            16,
        ),
        TxLayout(
            TransactionKind.FULL_EXIT,
            [_opcode(), _account("account_id"), _address(), _token(), _raw_amount(),
             _padding(6)],
            48,
        ),
    ]

    table = {layout.kind: layout for layout in layouts}
    missing = set(TransactionKind) - set(table)
    if missing:
        raise SchemaError(f"No layout for {sorted(k.name for k in missing)}")
    return MappingProxyType(table)


LAYOUTS: Mapping[TransactionKind, TxLayout] = _build_layouts()


def get_layout(kind: TransactionKind | int) -> TxLayout:
    """Return the layout for a transaction kind (or its opcode).

    Raises:
        SchemaError: If ``kind`` is not a known transaction kind
    """
    try:
        return LAYOUTS[TransactionKind(kind)]
    except ValueError as err:
        raise SchemaError(f"Unknown transaction kind: {kind!r}") from err
