"""mkey constants — reserved bytes, digit-pair code tables, and int64 range.

Every value in this module is part of the wire format.  Changing any of
them changes the bytes of existing keys, so treat them as frozen.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

# ── Structural bytes ─────────────────────────────────────────
# The delimiter must stay the smallest byte so that a tuple sorts
# before any of its extensions: ("users",) < ("users", 1).
KEY_DELIMITER: int = 0x00
STR_SUB_ESCAPE: int = 0x01

# ── Integer bytes ────────────────────────────────────────────
# Zero is a single byte.  Positive exponent bytes sit above it, negative
# exponent bytes mirror them below it:
#
#     0x35 .. 0x3E   negative, 10 pairs .. 1 pair
#     0x40           zero
#     0x41 .. 0x4A   positive, 1 pair .. 10 pairs
SUBSCRIPT_ZERO: int = 0x40
SUBSCRIPT_BIAS: int = 0x40
NEG_MNTSSA_END: int = 0xFF

# ── Text prefix ──────────────────────────────────────────────
# 0xFF is also NEG_MNTSSA_END, but the terminator never appears at
# offset 0, so first-byte classification stays unambiguous.  Being the
# largest byte, it puts every text after every integer.
STR_SUB_PREFIX: int = 0xFF

# ── Signed 64-bit integer range ──────────────────────────────
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1

# 19 decimal digits → 10 base-100 pairs.
MAX_PAIRS: int = 10

POS_EXP_MIN: int = SUBSCRIPT_BIAS + 1
POS_EXP_MAX: int = SUBSCRIPT_BIAS + MAX_PAIRS
NEG_EXP_MAX: int = SUBSCRIPT_ZERO - 2
NEG_EXP_MIN: int = SUBSCRIPT_ZERO - 1 - MAX_PAIRS

# ── Digit-pair code tables ───────────────────────────────────
# Each decade of digit pairs occupies one 16-byte row, leaving a gap of
# six unused bytes between rows.
#
#     POS_CODE:  0 → 0x01, 9 → 0x0A, 10 → 0x11, ..., 99 → 0x9A
#     NEG_CODE:  0 → 0xFE, 9 → 0xF5, 10 → 0xEE, ..., 99 → 0x65
POS_CODE: Tuple[int, ...] = tuple(
    0x10 * (d // 10) + d % 10 + 1 for d in range(100)
)
NEG_CODE: Tuple[int, ...] = tuple(
    0xFE - 0x10 * (d // 10) - d % 10 for d in range(100)
)

POS_DECODE: Mapping[int, int] = MappingProxyType(
    {b: d for d, b in enumerate(POS_CODE)}
)
NEG_DECODE: Mapping[int, int] = MappingProxyType(
    {b: d for d, b in enumerate(NEG_CODE)}
)
