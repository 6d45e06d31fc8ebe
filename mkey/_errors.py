"""mkey error codes and exception class.

Construction errors (bad input values, nesting, empty keys) and decode
errors (malformed bytes) share one exception type.  Callers branch on
``.code`` rather than on subclasses.
"""

from __future__ import annotations

# ── Input errors ─────────────────────────────────────────────
ERR_TYPE: str = "ERR_TYPE"                # unsupported source type (incl. bool)
ERR_NONFINITE: str = "ERR_NONFINITE"      # inf / nan
ERR_RANGE: str = "ERR_RANGE"              # outside int64, on encode or decode
ERR_NESTED: str = "ERR_NESTED"            # composite inside a composite
ERR_EMPTY_KEY: str = "ERR_EMPTY_KEY"      # composite with no components

# ── Decode errors ────────────────────────────────────────────
ERR_EMPTY_INPUT: str = "ERR_EMPTY_INPUT"  # b"" or an empty component run
ERR_LEAD_BYTE: str = "ERR_LEAD_BYTE"      # first byte matches no class
ERR_TRUNCATED: str = "ERR_TRUNCATED"      # missing pairs or terminator
ERR_MANTISSA: str = "ERR_MANTISSA"        # unknown, surplus or non-canonical pair
ERR_ESCAPE: str = "ERR_ESCAPE"            # dangling or needless escape
ERR_DELIMITER: str = "ERR_DELIMITER"      # literal 0x00 inside a scalar
ERR_UTF8: str = "ERR_UTF8"                # text body is not UTF-8


class MKeyError(Exception):
    """Exception for mkey encode/decode errors.

    The `.code` attribute is one of the ERR_* strings above.
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or code)
        self.code = code
