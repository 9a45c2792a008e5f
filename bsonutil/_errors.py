"""bsonutil error codes and exception class.

Every failure in this package is local and recoverable: it is raised to
the immediate caller as a BsonError carrying one of the ERR_* codes
below.  Readers guarantee the span they were handed is unchanged when
they raise, so a caller may retry once more data has arrived.
"""

from __future__ import annotations

from typing import Dict

# ── Read-side codes ──────────────────────────────────────────
ERR_INSUFFICIENT_DATA: str = "ERR_INSUFFICIENT_DATA"    # read wider than remaining
ERR_MISSING_TERMINATOR: str = "ERR_MISSING_TERMINATOR"  # cstring has no 0x00
ERR_BAD_STRING: str = "ERR_BAD_STRING"                  # malformed length-prefixed string
ERR_INVALID_BOOLEAN: str = "ERR_INVALID_BOOLEAN"        # boolean byte not 0x00/0x01

# ── Write-side codes ─────────────────────────────────────────
# These exist only because Python values are less constrained than the
# wire types: ints are unbounded and str may contain U+0000.
ERR_RANGE: str = "ERR_RANGE"                  # int out of range / negative index
ERR_EMBEDDED_NULL: str = "ERR_EMBEDDED_NULL"  # cstring text containing U+0000
ERR_BAD_TEXT: str = "ERR_BAD_TEXT"            # str with a lone surrogate

DESCRIPTIONS: Dict[str, str] = {
    ERR_INSUFFICIENT_DATA: "not enough data remaining",
    ERR_MISSING_TERMINATOR: "cstring terminator not found",
    ERR_BAD_STRING: "malformed length-prefixed string",
    ERR_INVALID_BOOLEAN: "invalid boolean byte",
    ERR_RANGE: "value out of range",
    ERR_EMBEDDED_NULL: "embedded null in cstring",
    ERR_BAD_TEXT: "text not encodable as UTF-8",
}


class BsonError(ValueError):
    """Exception for bsonutil encode/decode errors.

    The `.code` attribute is one of the ERR_* strings above and is what
    tests and conformance vectors compare against.
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or DESCRIPTIONS.get(code, code))
        self.code = code
