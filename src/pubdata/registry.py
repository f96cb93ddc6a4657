"""Opcode-dispatched encoding and decoding of operation models.

This module keeps the mapping from transaction kind to operation model so that
public data of unknown kind can be decoded straight into the right model.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from pydantic import ValidationError

from .codec.decoder import decode_any
from .codec.layout import TransactionKind
from .exceptions import DecodeError, SchemaError
from .models import (
    BaseOperation,
    CloseOp,
    DepositOp,
    FullExitOp,
    NoopOp,
    TransferOp,
    TransferToNewOp,
    WithdrawOp,
)

logger = logging.getLogger(__name__)


def _build_registry() -> Mapping[TransactionKind, type[BaseOperation]]:
    table: dict[TransactionKind, type[BaseOperation]] = {
        TransactionKind.NOOP: NoopOp,
        TransactionKind.DEPOSIT: DepositOp,
        TransactionKind.TRANSFER_TO_NEW: TransferToNewOp,
        TransactionKind.WITHDRAW: WithdrawOp,
        TransactionKind.CLOSE: CloseOp,
        TransactionKind.TRANSFER: TransferOp,
        TransactionKind.FULL_EXIT: FullExitOp,
    }

    for kind, cls in table.items():
        if cls.kind is not kind:
            raise SchemaError(f"{cls.__name__} is bound to {cls.kind!r}, not {kind.name}")
    missing = set(TransactionKind) - set(table)
    if missing:
        raise SchemaError(f"No operation model for {sorted(k.name for k in missing)}")
    return MappingProxyType(table)


# Read-only: kind -> operation class
OPERATION_REGISTRY: Mapping[TransactionKind, type[BaseOperation]] = _build_registry()


def operation_class(kind: TransactionKind | int) -> type[BaseOperation]:
    """Return the operation model registered for a kind (or opcode).

    Raises:
        KeyError: If nothing is registered for ``kind``
    """
    try:
        return OPERATION_REGISTRY[TransactionKind(kind)]
    except ValueError as err:
        raise KeyError(f"Unknown transaction kind: {kind!r}") from err


def encode_operation(operation: BaseOperation) -> bytes:
    """Encode an operation model to public data."""
    return operation.public_data()


def decode_operation(data: bytes) -> BaseOperation:
    """Decode public data of any kind into its operation model.

    The opcode byte selects the layout and the model class.

    Raises:
        TruncatedBuffer: If the buffer length does not match its kind
        DecodeError: If the opcode is unknown or the data is invalid

    Example:
        >>> op = decode_operation(received)
        >>> if isinstance(op, WithdrawOp):
        ...     print(f"Withdraw {op.amount} of token {op.token}")
    """
    kind, fields = decode_any(data)

    cls = OPERATION_REGISTRY[kind]
    try:
        operation = cls.from_fields(fields)
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {cls.__name__}: {e}") from e

    logger.debug("Decoded %s from %d bytes", cls.__name__, len(data))
    return operation
