"""Property-based tests using hypothesis."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pubdata import (
    LAYOUTS,
    FieldOverflow,
    TransactionKind,
    TxLayout,
    Unrepresentable,
    decode,
    encode,
)
from pubdata.codec.layout import FieldEncoding
from pubdata.codec.packing import (
    PackedValue,
    PackingRole,
    closest_packable,
    is_packable,
    pack,
    pack_bytes,
    unpack,
    unpack_bytes,
)

ROLES = st.sampled_from(list(PackingRole))


def _field_strategy(layout: TxLayout) -> st.SearchStrategy[dict[str, Any]]:
    """Valid field values for every caller-supplied field of a layout."""
    strategies: dict[str, st.SearchStrategy[Any]] = {}
    for field in layout.input_fields:
        if field.encoding is FieldEncoding.RAW_UINT:
            strategies[field.name] = st.integers(min_value=0, max_value=field.max_value)
        elif field.encoding is FieldEncoding.PACKED:
            assert field.role is not None
            strategies[field.name] = st.integers(min_value=0, max_value=field.role.params.max_value)
        elif field.encoding is FieldEncoding.ADDRESS:
            strategies[field.name] = st.binary(min_size=field.width, max_size=field.width)
    return st.fixed_dictionaries(strategies)


@st.composite
def kind_and_fields(draw: st.DrawFn) -> tuple[TransactionKind, dict[str, Any]]:
    kind = draw(st.sampled_from(list(TransactionKind)))
    return kind, draw(_field_strategy(LAYOUTS[kind]))


@st.composite
def role_and_value(draw: st.DrawFn) -> tuple[PackingRole, int]:
    role = draw(ROLES)
    return role, draw(st.integers(min_value=0, max_value=role.params.max_value))


@st.composite
def role_and_packed(draw: st.DrawFn) -> tuple[PackingRole, PackedValue]:
    role = draw(ROLES)
    exponent = draw(st.integers(min_value=0, max_value=role.params.max_exponent))
    mantissa = draw(st.integers(min_value=0, max_value=role.params.max_mantissa))
    return role, PackedValue(exponent=exponent, mantissa=mantissa)


class TestPackingProperties:
    """Property-based tests for packed floats."""

    @given(role_and_value())
    def test_pack_is_bounded(self, case: tuple[PackingRole, int]) -> None:
        """Packing never rounds up and loses less than one exponent step."""
        role, value = case
        packed = pack(value, role)
        restored = unpack(packed, role)

        assert restored <= value
        assert value - restored < role.params.base**packed.exponent

    @given(role_and_value())
    def test_pack_fits_sub_fields(self, case: tuple[PackingRole, int]) -> None:
        role, value = case
        packed = pack(value, role)

        assert 0 <= packed.exponent <= role.params.max_exponent
        assert 0 <= packed.mantissa <= role.params.max_mantissa

    @given(role_and_packed())
    def test_repack_loses_nothing(self, case: tuple[PackingRole, PackedValue]) -> None:
        """A value that came out of unpack packs again without further loss."""
        role, packed = case
        value = unpack(packed, role)

        assert unpack(pack(value, role), role) == value
        assert is_packable(value, role)

    @given(role_and_value())
    def test_closest_packable_is_idempotent(self, case: tuple[PackingRole, int]) -> None:
        role, value = case
        closest = closest_packable(value, role)

        assert closest_packable(closest, role) == closest

    @given(role_and_packed())
    def test_bytes_roundtrip(self, case: tuple[PackingRole, PackedValue]) -> None:
        role, packed = case
        data = pack_bytes(packed, role)

        assert len(data) == role.params.byte_width
        assert unpack_bytes(data, role) == packed

    @given(st.binary(min_size=2, max_size=2))
    def test_any_fee_bytes_decode(self, data: bytes) -> None:
        """Every bit pattern is a valid packed fee."""
        packed = unpack_bytes(data, PackingRole.FEE)
        assert unpack(packed, PackingRole.FEE) >= 0

    @given(role=ROLES, excess=st.integers(min_value=1, max_value=10**40))
    def test_above_maximum_is_rejected(self, role: PackingRole, excess: int) -> None:
        with pytest.raises(Unrepresentable):
            pack(role.params.max_value + excess, role)


class TestCodecProperties:
    """Property-based tests for the public data codec."""

    @given(kind_and_fields())
    def test_fixed_length(self, case: tuple[TransactionKind, dict[str, Any]]) -> None:
        kind, fields = case
        assert len(encode(kind, fields)) == LAYOUTS[kind].total_width

    @given(kind_and_fields())
    def test_encode_decode_roundtrip(self, case: tuple[TransactionKind, dict[str, Any]]) -> None:
        """Raw fields round-trip exactly, packed fields to their closest packable value."""
        kind, fields = case
        decoded = decode(kind, encode(kind, fields))

        layout = LAYOUTS[kind]
        for field in layout.input_fields:
            if field.encoding is FieldEncoding.PACKED:
                assert field.role is not None
                assert decoded[field.name] == closest_packable(fields[field.name], field.role)
            else:
                assert decoded[field.name] == fields[field.name]

    @given(kind_and_fields())
    def test_encode_deterministic(self, case: tuple[TransactionKind, dict[str, Any]]) -> None:
        kind, fields = case
        assert encode(kind, fields) == encode(kind, dict(fields))

    @given(
        amount=st.integers(min_value=0, max_value=2**128 - 1),
        token=st.integers(min_value=0, max_value=2**16 - 1),
    )
    def test_raw_amount_roundtrip(self, amount: int, token: int) -> None:
        fields = {"token": token, "amount": f"0x{amount:032x}", "address": bytes(20)}
        decoded = decode(TransactionKind.DEPOSIT, encode(TransactionKind.DEPOSIT, fields))

        assert decoded["amount"] == amount
        assert decoded["token"] == token

    @given(amount=st.integers(min_value=2**128, max_value=2**256))
    def test_raw_amount_overflow(self, amount: int) -> None:
        with pytest.raises(FieldOverflow):
            encode(TransactionKind.DEPOSIT, {"token": 0, "amount": amount, "address": bytes(20)})
