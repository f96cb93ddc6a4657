"""Base operation class and pubdata-specific Pydantic configuration.

This module provides the BaseOperation class that all operation models inherit
from. Each subclass is bound to one transaction kind and must declare exactly
the caller-supplied fields of that kind's layout.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from ..codec.decoder import FieldValue, decode
from ..codec.encoder import encode
from ..codec.layout import TransactionKind, get_layout
from ..exceptions import SchemaError

OpT = TypeVar("OpT", bound="BaseOperation")


class BaseOperation(BaseModel):
    """Base class for all rollup operation models.

    Subclasses set the ``kind`` class variable and declare one field per
    caller-supplied layout field, using the helpers from ``pubdata.models.fields``.

    Example:
        >>> class CloseOp(BaseOperation):
        ...     kind: ClassVar[TransactionKind] = TransactionKind.CLOSE
        ...     account_id: HexUInt = AccountId()
        >>> CloseOp(account_id=7).public_data().hex()
        '0400000700000000'

    Attributes:
        kind: Transaction kind this model serializes to
    """

    model_config = ConfigDict(
        # Values are already validated by the caller; allow ints from hex etc.
        strict=False,
        # Operations are value types
        frozen=True,
        # Forbid fields that are not part of the layout
        extra="forbid",
    )

    kind: ClassVar[Optional[TransactionKind]] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        """Check that the model fields match its layout once pydantic is done."""
        super().__pydantic_init_subclass__(**kwargs)

        if cls.kind is None:
            return

        expected = {field.name for field in get_layout(cls.kind).input_fields}
        declared = set(cls.model_fields)
        if declared != expected:
            raise SchemaError(
                f"{cls.__name__} fields {sorted(declared)} do not match "
                f"{cls.kind.name} layout fields {sorted(expected)}"
            )

    def to_fields(self) -> dict[str, Any]:
        """Return the field mapping consumed by ``pubdata.encode``."""
        return self.model_dump()

    def public_data(self) -> bytes:
        """Encode this operation to its public data."""
        if self.kind is None:
            raise SchemaError(f"{type(self).__name__} has no transaction kind")
        return encode(self.kind, self.to_fields())

    @classmethod
    def from_fields(cls: type[OpT], fields: Mapping[str, FieldValue]) -> OpT:
        """Build an operation from a decoded field mapping."""
        return cls(**fields)

    @classmethod
    def from_public_data(cls: type[OpT], data: bytes) -> OpT:
        """Decode public data of this model's kind.

        Packed amounts and fees come back as the value the packed form
        represents, not necessarily the value originally encoded.
        """
        if cls.kind is None:
            raise SchemaError(f"{cls.__name__} has no transaction kind")
        return cls.from_fields(decode(cls.kind, data))
