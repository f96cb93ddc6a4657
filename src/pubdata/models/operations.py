"""Operation models, one per transaction kind."""

from __future__ import annotations

from typing import ClassVar

from ..codec.layout import TransactionKind
from .base import BaseOperation
from .fields import AccountId, Address, HexUInt, PackedAmount, PackedFee, RawAmount, TokenId


class NoopOp(BaseOperation):
    """Empty chunk filler."""

    kind: ClassVar[TransactionKind] = TransactionKind.NOOP


class DepositOp(BaseOperation):
    """Deposit from the settlement chain into a rollup address.

    The account id is assigned by the operator; the contract side always
    emits zero, which is the default. Deposits carry no fee.
    """

    kind: ClassVar[TransactionKind] = TransactionKind.DEPOSIT

    account_id: HexUInt = AccountId(default=0)
    token: HexUInt = TokenId()
    amount: HexUInt = RawAmount()
    address: Address


class TransferToNewOp(BaseOperation):
    """Transfer that creates the receiving account."""

    kind: ClassVar[TransactionKind] = TransactionKind.TRANSFER_TO_NEW

    from_account: HexUInt = AccountId()
    token: HexUInt = TokenId()
    amount: HexUInt = PackedAmount()
    to_address: Address
    to_account: HexUInt = AccountId()
    fee: HexUInt = PackedFee()


class WithdrawOp(BaseOperation):
    """Withdrawal to a settlement chain address."""

    kind: ClassVar[TransactionKind] = TransactionKind.WITHDRAW

    account_id: HexUInt = AccountId(default=0)
    token: HexUInt = TokenId()
    amount: HexUInt = RawAmount()
    fee: HexUInt = PackedFee()
    address: Address


class CloseOp(BaseOperation):
    kind: ClassVar[TransactionKind] = TransactionKind.CLOSE

    account_id: HexUInt = AccountId()


class TransferOp(BaseOperation):
    """Transfer between two existing accounts."""

    kind: ClassVar[TransactionKind] = TransactionKind.TRANSFER

    from_account: HexUInt = AccountId()
    token: HexUInt = TokenId()
    to_account: HexUInt = AccountId()
    amount: HexUInt = PackedAmount()
    fee: HexUInt = PackedFee()


class FullExitOp(BaseOperation):
    """Exit requested on the settlement chain for a whole token balance."""

    kind: ClassVar[TransactionKind] = TransactionKind.FULL_EXIT

    account_id: HexUInt = AccountId()
    address: Address
    token: HexUInt = TokenId()
    amount: HexUInt = RawAmount()
