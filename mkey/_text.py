"""Text codec — UTF-8 text to a prefixed, escaped byte string and back.

    STR_SUB_PREFIX  body

In the body, KEY_DELIMITER and STR_SUB_ESCAPE are written as
STR_SUB_ESCAPE followed by the byte XOR 0xFF; every other byte is copied.
The body therefore never holds a literal delimiter.
"""

from __future__ import annotations

from structlog import get_logger

from ._constants import KEY_DELIMITER, STR_SUB_ESCAPE, STR_SUB_PREFIX
from ._errors import (
    ERR_DELIMITER,
    ERR_EMPTY_INPUT,
    ERR_ESCAPE,
    ERR_LEAD_BYTE,
    ERR_UTF8,
    MKeyError,
)

logger = get_logger()

_NEEDS_ESCAPE = (KEY_DELIMITER, STR_SUB_ESCAPE)


def to_utf8(value: str) -> bytes:
    try:
        return value.encode("utf-8", errors="strict")
    except UnicodeEncodeError:
        # Lone surrogates are the only way to get here.
        raise MKeyError(ERR_UTF8, "text is not encodable as UTF-8")


def from_utf8(raw: bytes) -> str:
    try:
        return raw.decode("utf-8", errors="strict")
    except UnicodeDecodeError:
        raise MKeyError(ERR_UTF8, "invalid utf-8")


def encode_text(raw: bytes) -> bytes:
    """Encode UTF-8 bytes as a text subscript."""
    out = bytearray([STR_SUB_PREFIX])
    for b in raw:
        if b in _NEEDS_ESCAPE:
            out.append(STR_SUB_ESCAPE)
            out.append(b ^ 0xFF)
        else:
            out.append(b)
    return bytes(out)


def decode_text_bytes(buf: bytes, lenient: bool = False) -> bytes:
    """Strip the prefix and undo escaping.  Returns the raw body bytes."""
    if not buf:
        raise MKeyError(ERR_EMPTY_INPUT, "empty text encoding")
    if buf[0] != STR_SUB_PREFIX:
        raise MKeyError(ERR_LEAD_BYTE, "not a text prefix 0x{:02x}".format(buf[0]))

    out = bytearray()
    i = 1
    n = len(buf)
    while i < n:
        b = buf[i]
        if b == STR_SUB_ESCAPE:
            if i + 1 >= n:
                raise MKeyError(ERR_ESCAPE, "escape marker at end of text")
            orig = buf[i + 1] ^ 0xFF
            if orig not in _NEEDS_ESCAPE:
                if not lenient:
                    raise MKeyError(ERR_ESCAPE,
                                    "needless escape of 0x{:02x}".format(orig))
                logger.debug("accepting needless escape", byte=orig, offset=i)
            out.append(orig)
            i += 2
            continue
        if b == KEY_DELIMITER:
            if lenient:
                break
            raise MKeyError(ERR_DELIMITER, "delimiter inside text at offset {}".format(i))
        out.append(b)
        i += 1
    return bytes(out)


def decode_text(buf: bytes, lenient: bool = False) -> str:
    return from_utf8(decode_text_bytes(buf, lenient))
