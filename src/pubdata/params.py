"""Protocol constants for rollup public data.

Every value in this module is part of the consensus format shared with the
proving circuit and the on-chain verifier. Changing any of them is a breaking
protocol change and must come with a new PUBDATA_FORMAT_VERSION.
"""

from __future__ import annotations

PUBDATA_FORMAT_VERSION = 1

# Public data is always a whole number of chunks
CHUNK_BYTES = 8

# Numeric packing base shared by amounts and fees
FLOAT_BASE = 10

# Packed amount: 5-bit exponent, 35-bit mantissa (40 bits = 5 bytes)
AMOUNT_EXPONENT_BIT_WIDTH = 5
AMOUNT_MANTISSA_BIT_WIDTH = 35

# Packed fee: 5-bit exponent, 11-bit mantissa (16 bits = 2 bytes)
FEE_EXPONENT_BIT_WIDTH = 5
FEE_MANTISSA_BIT_WIDTH = 11

# Field widths in bytes
OPCODE_BYTES = 1
ACCOUNT_ID_BYTES = 3
TOKEN_BYTES = 2
RAW_AMOUNT_BYTES = 16
ADDRESS_BYTES = 20
