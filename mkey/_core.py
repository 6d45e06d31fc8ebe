"""mkey core — native value coercion, scalar dispatch, and key comparison.

A scalar encoding is classified by its first byte alone:

    0x35 .. 0x3E   negative integer
    0x40           zero
    0x41 .. 0x4A   positive integer
    0xFF           text

Anything else is malformed.  The integer and text codecs do the rest.
"""

from __future__ import annotations

import math
import re
from typing import Any, Tuple, Union

from ._constants import (
    INT64_MAX,
    INT64_MIN,
    KEY_DELIMITER,
    STR_SUB_PREFIX,
    SUBSCRIPT_ZERO,
)
from ._errors import (
    ERR_DELIMITER,
    ERR_EMPTY_INPUT,
    ERR_LEAD_BYTE,
    ERR_NONFINITE,
    ERR_TYPE,
    MKeyError,
)
from ._integer import check_int64, decode_integer, is_integer_lead
from ._text import decode_text, from_utf8, to_utf8

KIND_ZERO = "zero"
KIND_INTEGER = "integer"
KIND_TEXT = "text"

# Canonical spelling only.  "007", "+7" and "-0" stay text.
_INT_LITERAL = re.compile(r"0|-?[1-9][0-9]*")

Native = Union[int, str]


def is_integer_literal(s: str) -> bool:
    return _INT_LITERAL.fullmatch(s) is not None


# ── Native coercion ──────────────────────────────────────────

def integer_from_native(value: Any) -> int:
    """Coerce int, float or a numeric literal to a range-checked int."""
    # bool is a subclass of int.  True is not a subscript.
    if isinstance(value, bool):
        raise MKeyError(ERR_TYPE, "bool is not a supported subscript")

    if isinstance(value, int):
        return check_int64(value)

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise MKeyError(ERR_NONFINITE, "cannot encode {!r}".format(value))
        return check_int64(int(value))

    if isinstance(value, str):
        # Looser than the subscript rule: "007" is 7 and "3.14" truncates to 3.
        try:
            if "." in value:
                return integer_from_native(float(value))
            return check_int64(int(value, 10))
        except ValueError:
            raise MKeyError(ERR_TYPE,
                            "not a numeric literal: {!r}".format(value)) from None

    raise MKeyError(ERR_TYPE,
                    "cannot convert {} to an integer".format(type(value).__name__))


def text_from_native(value: Any) -> str:
    """Coerce str, UTF-8 bytes or None to str."""
    if value is None:
        return ""
    if isinstance(value, str):
        to_utf8(value)
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return from_utf8(bytes(value))
    raise MKeyError(ERR_TYPE,
                    "cannot convert {} to text".format(type(value).__name__))


def classify_native(value: Any, subscript: bool = False) -> Tuple[str, Native]:
    """Decide whether a native value is an integer or text subscript.

    With ``subscript=True`` a string spelled as a canonical int64 literal
    counts as an integer, as hierarchical key paths expect.
    """
    if isinstance(value, bool):
        raise MKeyError(ERR_TYPE, "bool is not a supported subscript")
    if isinstance(value, (int, float)):
        return KIND_INTEGER, integer_from_native(value)
    if subscript and isinstance(value, str) and is_integer_literal(value):
        n = int(value)
        if INT64_MIN <= n <= INT64_MAX:
            return KIND_INTEGER, n
    return KIND_TEXT, text_from_native(value)


# ── Scalar dispatch ──────────────────────────────────────────

def classify(lead: int) -> str:
    """Map the first byte of an encoding to its scalar kind."""
    if lead == SUBSCRIPT_ZERO:
        return KIND_ZERO
    if lead == STR_SUB_PREFIX:
        return KIND_TEXT
    if is_integer_lead(lead):
        return KIND_INTEGER
    raise MKeyError(ERR_LEAD_BYTE, "unrecognized lead byte 0x{:02x}".format(lead))


def decode_scalar(buf: bytes, lenient: bool = False) -> Native:
    """Decode one scalar encoding to an int or str.

    A literal delimiter means the input is a composite key.  Strict mode
    rejects it; lenient mode decodes up to it.
    """
    buf = bytes(buf)
    if not buf:
        raise MKeyError(ERR_EMPTY_INPUT, "empty encoding")

    cut = buf.find(KEY_DELIMITER)
    if cut >= 0:
        if not lenient:
            raise MKeyError(ERR_DELIMITER,
                            "delimiter at offset {}; use decode_composite".format(cut))
        buf = buf[:cut]
        if not buf:
            raise MKeyError(ERR_EMPTY_INPUT, "empty encoding before delimiter")

    kind = classify(buf[0])
    if kind == KIND_TEXT:
        return decode_text(buf, lenient)
    return decode_integer(buf, lenient)


# ── Comparison ───────────────────────────────────────────────
# Unsigned byte-wise order.  Python's bytes comparison already is memcmp
# with the shorter-prefix-first rule.

def compare(a: bytes, b: bytes) -> int:
    """Return -1, 0 or 1 as a sorts before, equal to, or after b."""
    a = bytes(a)
    b = bytes(b)
    if a == b:
        return 0
    return -1 if a < b else 1
