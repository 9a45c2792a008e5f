"""BSON wire constants — overheads, primitive sizes, element type tags.

These are shared with the document layer built on top of this package,
so the values here must match the BSON format exactly.
"""

from __future__ import annotations

# ── Size pre-computation overheads ───────────────────────────
# Object and array headers: 4-byte int32 length + trailing 0x00.
OBJECT_OVERHEAD_BYTES: int = 5
ARRAY_OVERHEAD_BYTES: int = 5
# The one-byte type tag in front of every element.
ELEMENT_OVERHEAD_BYTES: int = 1
# Length-prefixed string: 4-byte int32 length + trailing 0x00.
STRING_OVERHEAD_BYTES: int = 5

# ── Fixed widths of primitive values ─────────────────────────
SIZE_INT32: int = 4
SIZE_INT64: int = 8
SIZE_DOUBLE: int = 8
SIZE_BOOLEAN: int = 1

# Last byte of every embedded document or array.  Also the cstring
# terminator.
DOCUMENT_END: int = 0x00
TERMINATOR: bytes = b"\x00"

# ── Boolean payload ──────────────────────────────────────────
# Anything other than these two bytes is an invalid boolean.
BOOLEAN_FALSE: int = 0x00
BOOLEAN_TRUE: int = 0x01

# ── Element type tags ────────────────────────────────────────
# Only DOUBLE, STRING, DOCUMENT, ARRAY, BOOLEAN, INT32 and INT64 have
# primitives in this package.  The rest are listed so the higher layer
# can recognise (and reject) them.
TYPE_DOUBLE: int = 0x01
TYPE_STRING: int = 0x02
TYPE_DOCUMENT: int = 0x03
TYPE_ARRAY: int = 0x04
TYPE_BINARY: int = 0x05
TYPE_UNDEFINED: int = 0x06  # deprecated
TYPE_OBJECT_ID: int = 0x07
TYPE_BOOLEAN: int = 0x08
TYPE_DATE_TIME: int = 0x09
TYPE_NULL: int = 0x0A
TYPE_REGEX: int = 0x0B
TYPE_DB_POINTER: int = 0x0C  # deprecated
TYPE_JS_CODE: int = 0x0D
TYPE_SYMBOL: int = 0x0E  # deprecated
TYPE_JS_CODE_WITH_SCOPE: int = 0x0F
TYPE_INT32: int = 0x10
TYPE_TIMESTAMP: int = 0x11
TYPE_INT64: int = 0x12
TYPE_DEC128: int = 0x13
TYPE_MIN_KEY: int = 0xFF
TYPE_MAX_KEY: int = 0x7F

# ── Signed integer ranges ────────────────────────────────────
# Python ints are arbitrary-precision, so writers range-check against
# these explicitly.
INT32_MIN: int = -(2**31)
INT32_MAX: int = 2**31 - 1
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1
