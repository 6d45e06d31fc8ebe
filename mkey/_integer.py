"""Integer codec — signed int64 to order-preserving bytes and back.

Layout of a non-zero integer:

    exponent_byte  pair_byte ...  [NEG_MNTSSA_END if negative]

The magnitude is split into base-100 digit pairs, most significant first
(12345 → [1, 23, 45]).  The exponent byte carries sign and pair count;
each pair goes through POS_CODE or NEG_CODE.  Because NEG_CODE runs
downward, a larger negative magnitude yields smaller bytes and sorts
earlier.

Zero is the single byte SUBSCRIPT_ZERO.
"""

from __future__ import annotations

from typing import List, Mapping

from structlog import get_logger

from ._constants import (
    INT64_MAX,
    INT64_MIN,
    KEY_DELIMITER,
    NEG_CODE,
    NEG_DECODE,
    NEG_EXP_MAX,
    NEG_EXP_MIN,
    NEG_MNTSSA_END,
    POS_CODE,
    POS_DECODE,
    POS_EXP_MAX,
    POS_EXP_MIN,
    SUBSCRIPT_BIAS,
    SUBSCRIPT_ZERO,
)
from ._errors import (
    ERR_EMPTY_INPUT,
    ERR_LEAD_BYTE,
    ERR_MANTISSA,
    ERR_RANGE,
    ERR_TRUNCATED,
    MKeyError,
)

logger = get_logger()


def check_int64(n: int) -> int:
    if n < INT64_MIN or n > INT64_MAX:
        raise MKeyError(ERR_RANGE, "integer {} outside int64 range".format(n))
    return n


def digit_pairs(magnitude: int) -> List[int]:
    """Split a positive magnitude into base-100 pairs, most significant first."""
    pairs: List[int] = []
    while magnitude > 0:
        magnitude, pair = divmod(magnitude, 100)
        pairs.append(pair)
    pairs.reverse()
    return pairs


def encode_integer(n: int) -> bytes:
    """Encode a signed int64 so that byte order matches numeric order."""
    check_int64(n)
    if n == 0:
        return bytes([SUBSCRIPT_ZERO])

    negative = n < 0
    pairs = digit_pairs(-n if negative else n)

    if negative:
        # Mirror of the positive exponent below zero: 1 pair → 0x3E.
        out = [SUBSCRIPT_ZERO - 1 - len(pairs)]
        out.extend(NEG_CODE[p] for p in pairs)
        out.append(NEG_MNTSSA_END)
    else:
        out = [SUBSCRIPT_BIAS + len(pairs)]
        out.extend(POS_CODE[p] for p in pairs)
    return bytes(out)


def is_integer_lead(b: int) -> bool:
    return (
        b == SUBSCRIPT_ZERO
        or POS_EXP_MIN <= b <= POS_EXP_MAX
        or NEG_EXP_MIN <= b <= NEG_EXP_MAX
    )


def decode_integer(buf: bytes, lenient: bool = False) -> int:
    """Decode one integer encoding.

    Strict mode requires the exact canonical layout: the pair count named
    by the exponent byte, no leading zero pair, and for negatives a
    terminator as the final byte.

    Lenient mode skips bytes that are not in the sign's code table, stops
    at a terminator or delimiter, and does not check the pair count.
    Range is checked in both modes.
    """
    if not buf:
        raise MKeyError(ERR_EMPTY_INPUT, "empty integer encoding")

    lead = buf[0]
    if lead == SUBSCRIPT_ZERO:
        if len(buf) > 1 and not lenient:
            raise MKeyError(ERR_MANTISSA, "trailing bytes after zero")
        return 0

    table: Mapping[int, int]
    if POS_EXP_MIN <= lead <= POS_EXP_MAX:
        negative = False
        expected = lead - SUBSCRIPT_BIAS
        table = POS_DECODE
    elif NEG_EXP_MIN <= lead <= NEG_EXP_MAX:
        negative = True
        expected = SUBSCRIPT_ZERO - 1 - lead
        table = NEG_DECODE
    else:
        raise MKeyError(ERR_LEAD_BYTE, "not an integer lead byte 0x{:02x}".format(lead))

    mantissa = 0
    count = 0
    terminated = False
    off = 1
    while off < len(buf):
        b = buf[off]
        off += 1

        if b == NEG_MNTSSA_END and (negative or lenient):
            terminated = True
            break
        if b == KEY_DELIMITER and lenient:
            break

        pair = table.get(b)
        if pair is None:
            if lenient:
                logger.debug("skipping unrecognized mantissa byte", byte=b, offset=off - 1)
                continue
            raise MKeyError(ERR_MANTISSA,
                            "byte 0x{:02x} is not a digit pair".format(b))

        if not lenient:
            if count == 0 and pair == 0:
                raise MKeyError(ERR_MANTISSA, "leading zero digit pair")
            if count == expected:
                raise MKeyError(ERR_MANTISSA, "more digit pairs than exponent allows")

        mantissa = mantissa * 100 + pair
        count += 1

    if not lenient:
        if count < expected:
            raise MKeyError(ERR_TRUNCATED,
                            "expected {} digit pairs, got {}".format(expected, count))
        if negative and not terminated:
            raise MKeyError(ERR_TRUNCATED, "missing negative terminator")
        if off < len(buf):
            raise MKeyError(ERR_MANTISSA, "trailing bytes after terminator")

    return check_int64(-mantissa if negative else mantissa)
