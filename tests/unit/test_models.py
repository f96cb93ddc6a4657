"""Unit tests for operation models and the operation registry."""

from __future__ import annotations

from typing import ClassVar

import pytest
from pydantic import ValidationError

from pubdata import (
    OPERATION_REGISTRY,
    BaseOperation,
    CloseOp,
    DecodeError,
    DepositOp,
    SchemaError,
    TransactionKind,
    TransferOp,
    WithdrawOp,
    closest_packable,
    decode_operation,
    encode,
    encode_operation,
    operation_class,
)
from pubdata.codec.packing import PackingRole
from pubdata.models import AccountId, HexUInt


class TestOperationModels:
    """Test model validation and conversion."""

    def test_deposit_matches_codec(self, eth_address: bytes, one_eth: int) -> None:
        op = DepositOp(token=5, amount="0x0de0b6b3a7640000", address="0x" + eth_address.hex())

        assert op.account_id == 0
        assert op.amount == one_eth
        assert op.address == eth_address
        assert op.public_data() == encode(
            TransactionKind.DEPOSIT,
            {"token": 5, "amount": one_eth, "address": eth_address},
        )

    def test_short_address_is_left_padded(self) -> None:
        op = DepositOp(token=0, amount=0, address="0x" + "00" * 18 + "0001")
        assert op.address == bytes(19) + b"\x01"

    def test_to_fields(self, eth_address: bytes) -> None:
        op = WithdrawOp(token=1, amount=2, fee=3, address=eth_address)

        assert op.to_fields() == {
            "account_id": 0,
            "token": 1,
            "amount": 2,
            "fee": 3,
            "address": eth_address,
        }

    def test_frozen(self) -> None:
        op = CloseOp(account_id=1)
        with pytest.raises(ValidationError):
            op.account_id = 2  # type: ignore[misc]

    def test_extra_field(self, eth_address: bytes) -> None:
        with pytest.raises(ValidationError):
            DepositOp(token=0, amount=0, address=eth_address, fee=0)  # type: ignore[call-arg]

    def test_token_bounds(self, eth_address: bytes) -> None:
        with pytest.raises(ValidationError):
            DepositOp(token=2**16, amount=0, address=eth_address)

    def test_raw_amount_bounds(self, eth_address: bytes) -> None:
        with pytest.raises(ValidationError):
            DepositOp(token=0, amount=2**128, address=eth_address)

    def test_fee_bounds(self, eth_address: bytes) -> None:
        with pytest.raises(ValidationError):
            WithdrawOp(token=0, amount=0, fee=2047 * 10**31 + 1, address=eth_address)

    def test_invalid_hex(self, eth_address: bytes) -> None:
        with pytest.raises(ValidationError):
            DepositOp(token=0, amount="0xabc", address=eth_address)

    def test_address_too_long(self) -> None:
        with pytest.raises(ValidationError):
            DepositOp(token=0, amount=0, address=bytes(21))

    def test_from_public_data_is_lossy_for_packed_fields(self) -> None:
        op = TransferOp(from_account=1, token=0, to_account=2, amount=123_456_789_012_345, fee=2049)
        decoded = TransferOp.from_public_data(op.public_data())

        assert decoded.amount == closest_packable(op.amount, PackingRole.AMOUNT)
        assert decoded.fee == 2040
        assert decoded.from_account == 1

    def test_fields_must_match_layout(self) -> None:
        with pytest.raises(SchemaError, match="do not match"):

            class BadCloseOp(BaseOperation):
                kind: ClassVar[TransactionKind] = TransactionKind.CLOSE

                account: HexUInt = AccountId()


class TestRegistry:
    """Test opcode-dispatched model decoding."""

    def test_every_kind_registered(self) -> None:
        assert set(OPERATION_REGISTRY) == set(TransactionKind)

    def test_operation_class(self) -> None:
        assert operation_class(TransactionKind.TRANSFER) is TransferOp
        assert operation_class(0x03) is WithdrawOp

    def test_operation_class_unknown(self) -> None:
        with pytest.raises(KeyError):
            operation_class(0x7F)

    def test_decode_operation(self, eth_address: bytes) -> None:
        op = WithdrawOp(account_id=4, token=1, amount=10**18, fee=100, address=eth_address)
        decoded = decode_operation(encode_operation(op))

        assert isinstance(decoded, WithdrawOp)
        assert decoded == op

    def test_decode_operation_unknown_opcode(self) -> None:
        with pytest.raises(DecodeError):
            decode_operation(b"\x7f" + bytes(7))

    def test_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            OPERATION_REGISTRY[TransactionKind.CLOSE] = CloseOp  # type: ignore[index]

    def test_registered_models_match_their_kind(self) -> None:
        for kind, cls in OPERATION_REGISTRY.items():
            assert cls.kind is kind
