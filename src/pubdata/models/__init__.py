"""Pydantic operation models for pubdata.

This module provides the BaseOperation class, one model per transaction kind,
and field helpers for declaring layout-bounded fields.
"""

from __future__ import annotations

from .base import BaseOperation
from .fields import AccountId, Address, HexUInt, PackedAmount, PackedFee, RawAmount, TokenId
from .operations import (
    CloseOp,
    DepositOp,
    FullExitOp,
    NoopOp,
    TransferOp,
    TransferToNewOp,
    WithdrawOp,
)

__all__ = [
    "BaseOperation",
    # Field helpers
    "AccountId",
    "Address",
    "HexUInt",
    "PackedAmount",
    "PackedFee",
    "RawAmount",
    "TokenId",
    # Operations
    "NoopOp",
    "DepositOp",
    "TransferToNewOp",
    "WithdrawOp",
    "CloseOp",
    "TransferOp",
    "FullExitOp",
]
