"""Composite codec — join scalar encodings into one key and split them again.

    component_0  0x00  component_1  0x00  ...  component_n

No component encoding contains a literal 0x00 (integer bytes are all
non-zero, text escapes it), so splitting on 0x00 is unambiguous.  A
tuple sorts before its extensions because the delimiter is smaller than
any byte a component can start with.
"""

from __future__ import annotations

from typing import List, Sequence

from structlog import get_logger

from ._constants import KEY_DELIMITER
from ._core import Native, decode_scalar
from ._errors import ERR_EMPTY_INPUT, ERR_EMPTY_KEY, MKeyError

logger = get_logger()

_DELIM = bytes([KEY_DELIMITER])


def join_encoded(parts: Sequence[bytes]) -> bytes:
    if not parts:
        raise MKeyError(ERR_EMPTY_KEY, "composite key requires at least one component")
    return _DELIM.join(parts)


def split_encoded(buf: bytes, lenient: bool = False) -> List[bytes]:
    """Split a composite encoding into per-component byte runs.

    An empty run (leading, trailing or doubled delimiter) is malformed.
    Lenient mode drops such runs instead.
    """
    buf = bytes(buf)
    if not buf:
        raise MKeyError(ERR_EMPTY_INPUT, "empty composite encoding")

    runs = buf.split(_DELIM)
    out: List[bytes] = []
    for i, run in enumerate(runs):
        if not run:
            if lenient:
                logger.debug("dropping empty component run", index=i)
                continue
            raise MKeyError(ERR_EMPTY_INPUT, "empty component at index {}".format(i))
        out.append(run)
    if not out:
        raise MKeyError(ERR_EMPTY_INPUT, "composite encoding has no components")
    return out


def decode_composite(buf: bytes, lenient: bool = False) -> List[Native]:
    """Decode a composite encoding to a list of ints and strs."""
    return [decode_scalar(run, lenient) for run in split_encoded(buf, lenient)]
