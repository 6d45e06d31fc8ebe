"""mkey — order-preserving (memcomparable) keys for integers, text and tuples.

Encode subscripts so that plain byte comparison gives the logical order:
negative < zero < positive < text, and tuples compare component by
component with a prefix sorting before its extensions.

Quick start:
    >>> from mkey import decode_composite, encode_composite, encode_scalar
    >>> encode_composite(["users", 1]).hex()
    'ff7573657273004102'
    >>> decode_composite(bytes.fromhex("ff7573657273004102"))
    ['users', 1]
    >>> encode_scalar(-5) < encode_scalar(-1) < encode_scalar(0)
    True

Value objects cache their encoding and sort by it:
    >>> from mkey import key
    >>> sorted([key("users", 2), key("users", "x"), key("users", 1)])
    [Composite('users', 1), Composite('users', 2), Composite('users', 'x')]
"""

from __future__ import annotations

from typing import List

from ._composite import decode_composite, join_encoded, split_encoded
from ._constants import (
    INT64_MAX,
    INT64_MIN,
    KEY_DELIMITER,
    NEG_CODE,
    NEG_MNTSSA_END,
    POS_CODE,
    STR_SUB_ESCAPE,
    STR_SUB_PREFIX,
    SUBSCRIPT_ZERO,
)
from ._core import compare, decode_scalar
from ._errors import (
    ERR_DELIMITER,
    ERR_EMPTY_INPUT,
    ERR_EMPTY_KEY,
    ERR_ESCAPE,
    ERR_LEAD_BYTE,
    ERR_MANTISSA,
    ERR_NESTED,
    ERR_NONFINITE,
    ERR_RANGE,
    ERR_TRUNCATED,
    ERR_TYPE,
    ERR_UTF8,
    MKeyError,
)
from ._values import (
    Composite,
    Integer,
    Scalar,
    Text,
    encode_composite,
    encode_scalar,
    from_encoded,
    key,
    scalar,
    subscript,
)

__version__ = "1.0.0"

__all__ = [
    # Functional API
    "encode_scalar",
    "decode_scalar",
    "encode_composite",
    "decode_composite",
    "compare",
    "sort_keys",
    "join_encoded",
    "split_encoded",
    # Value objects
    "Integer",
    "Text",
    "Composite",
    "Scalar",
    "key",
    "scalar",
    "subscript",
    "from_encoded",
    # Exception
    "MKeyError",
    # Error codes
    "ERR_TYPE",
    "ERR_NONFINITE",
    "ERR_RANGE",
    "ERR_NESTED",
    "ERR_EMPTY_KEY",
    "ERR_EMPTY_INPUT",
    "ERR_LEAD_BYTE",
    "ERR_TRUNCATED",
    "ERR_MANTISSA",
    "ERR_ESCAPE",
    "ERR_DELIMITER",
    "ERR_UTF8",
    # Wire format
    "KEY_DELIMITER",
    "STR_SUB_ESCAPE",
    "STR_SUB_PREFIX",
    "SUBSCRIPT_ZERO",
    "NEG_MNTSSA_END",
    "POS_CODE",
    "NEG_CODE",
    "INT64_MIN",
    "INT64_MAX",
]


def sort_keys(encoded: List[bytes]) -> List[bytes]:
    """Return encoded keys as bytes, in unsigned byte order.

    Items may be any bytes-like object.
    """
    return sorted(bytes(b) for b in encoded)
