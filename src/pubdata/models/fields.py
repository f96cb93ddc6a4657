"""Field type helpers for operation models.

This module provides annotated types that accept hex string input and
convenience functions that bound each numeric field by its public data width.
"""

from __future__ import annotations

from typing import Annotated, Any, cast

from pydantic import BeforeValidator, Field
from pydantic.fields import FieldInfo

from .. import params
from ..codec.packing import PackingRole, max_packable
from ..utils.hexstr import hex_to_bytes, hex_to_int


def _uint_input(value: Any) -> Any:
    if isinstance(value, str):
        return hex_to_int(value)
    return value


def _address_input(value: Any) -> Any:
    if isinstance(value, str):
        value = hex_to_bytes(value)
    if isinstance(value, (bytes, bytearray)) and len(value) < params.ADDRESS_BYTES:
        value = bytes(value).rjust(params.ADDRESS_BYTES, b"\x00")
    return value


# Integer that may also be given as a (0x-prefixed) big-endian hex string
HexUInt = Annotated[int, BeforeValidator(_uint_input)]

# 20-byte address; hex strings are accepted and short values are left-padded
Address = Annotated[
    bytes,
    BeforeValidator(_address_input),
    Field(min_length=params.ADDRESS_BYTES, max_length=params.ADDRESS_BYTES),
]


def _uint_field(num_bytes: int, **kwargs: Any) -> FieldInfo:
    return cast(FieldInfo, Field(ge=0, le=(1 << (num_bytes * 8)) - 1, **kwargs))


def AccountId(**kwargs: Any) -> FieldInfo:
    """Create an account id field bounded by the account id width.

    Example:
        >>> class Op(BaseOperation):
        ...     account_id: HexUInt = AccountId()
    """
    return _uint_field(params.ACCOUNT_ID_BYTES, **kwargs)


def TokenId(**kwargs: Any) -> FieldInfo:
    """Create a token id field bounded by the token id width."""
    return _uint_field(params.TOKEN_BYTES, **kwargs)


def RawAmount(**kwargs: Any) -> FieldInfo:
    """Create a full-precision amount field (16-byte raw integer)."""
    return _uint_field(params.RAW_AMOUNT_BYTES, **kwargs)


def PackedAmount(**kwargs: Any) -> FieldInfo:
    """Create an amount field that is stored as a packed float.

    Values below the packable maximum are accepted even when they are not
    exactly representable; encoding keeps the closest packable value below.
    """
    return cast(FieldInfo, Field(ge=0, le=max_packable(PackingRole.AMOUNT), **kwargs))


def PackedFee(**kwargs: Any) -> FieldInfo:
    """Create a fee field that is stored as a packed float."""
    return cast(FieldInfo, Field(ge=0, le=max_packable(PackingRole.FEE), **kwargs))
