"""Public data size calculation utilities.

This module provides functions to query the size of a transaction kind's
public data without encoding anything.
"""

from __future__ import annotations

from .. import params
from ..codec.layout import TransactionKind, get_layout


def pubdata_size(kind: TransactionKind | int) -> int:
    """Return the public data length of a transaction kind in bytes.

    Example:
        >>> pubdata_size(TransactionKind.DEPOSIT)
        48
    """
    return get_layout(kind).total_width


def pubdata_chunks(kind: TransactionKind | int) -> int:
    """Return how many chunks a transaction kind occupies in a block.

    Example:
        >>> pubdata_chunks(TransactionKind.TRANSFER)
        2
    """
    return get_layout(kind).total_width // params.CHUNK_BYTES


def field_sizes(kind: TransactionKind | int) -> dict[str, int]:
    """Get the width in bytes of every field of a transaction kind.

    Padding is reported under the name ``padding``.

    Example:
        >>> field_sizes(TransactionKind.CLOSE)
        {'opcode': 1, 'account_id': 3, 'padding': 4}
    """
    return {field.name: field.width for field in get_layout(kind).fields}
