"""bsonutil — primitive codec layer for BSON-style documents.

Little-endian numeric encode/decode, a bounds-checked read cursor,
cstring / length-prefixed string transcoding, and array-key helpers.
The document model itself (type dispatch, trees) is built on top.

Quick start:
    >>> from bsonutil import ByteSpan, read_cstring
    >>> span = ByteSpan(b"hi\\x00\\x2a\\x00\\x00\\x00")
    >>> read_cstring(span)
    Read(value='hi', consumed=3)
    >>> span.read_int32()
    Read(value=42, consumed=4)
    >>> span.remaining
    0

Failed reads raise BsonError and leave the span where it was:
    >>> span = ByteSpan(b"hi")
    >>> read_cstring(span)
    Traceback (most recent call last):
      ...
    bsonutil._errors.BsonError: no terminator within 2 bytes
    >>> span.remaining
    2
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from ._constants import (
    ARRAY_OVERHEAD_BYTES,
    BOOLEAN_FALSE,
    BOOLEAN_TRUE,
    DOCUMENT_END,
    ELEMENT_OVERHEAD_BYTES,
    OBJECT_OVERHEAD_BYTES,
    SIZE_BOOLEAN,
    SIZE_DOUBLE,
    SIZE_INT32,
    SIZE_INT64,
    STRING_OVERHEAD_BYTES,
)
from ._cursor import ByteSpan, Read, WriteBuffer
from ._errors import (
    ERR_BAD_STRING,
    ERR_BAD_TEXT,
    ERR_EMBEDDED_NULL,
    ERR_INSUFFICIENT_DATA,
    ERR_INVALID_BOOLEAN,
    ERR_MISSING_TERMINATOR,
    ERR_RANGE,
    BsonError,
)
from ._keys import array_key_size, digits, index_to_key, object_key_size
from ._numeric import (
    pack_double,
    pack_int32,
    pack_int64,
    unpack_double,
    unpack_int32,
    unpack_int64,
)
from ._strings import (
    byte_array_to_bson_string,
    byte_array_to_string,
    read_cstring,
    read_string,
    string_to_bson_bytes,
    string_to_byte_array,
    string_value_size,
)

__version__ = "1.0.0"

__all__ = [
    # Cursors
    "ByteSpan",
    "WriteBuffer",
    "Read",
    # Numeric codec
    "pack_int32",
    "pack_int64",
    "pack_double",
    "unpack_int32",
    "unpack_int64",
    "unpack_double",
    # Strings
    "read_cstring",
    "read_string",
    "string_to_byte_array",
    "byte_array_to_string",
    "byte_array_to_bson_string",
    "string_to_bson_bytes",
    "string_value_size",
    # Keys and sizes
    "index_to_key",
    "digits",
    "object_key_size",
    "array_key_size",
    # By-name dispatch
    "READERS",
    "read",
    "encode",
    # Exception
    "BsonError",
    # Error codes
    "ERR_INSUFFICIENT_DATA",
    "ERR_MISSING_TERMINATOR",
    "ERR_BAD_STRING",
    "ERR_INVALID_BOOLEAN",
    "ERR_RANGE",
    "ERR_EMBEDDED_NULL",
    "ERR_BAD_TEXT",
    # Wire constants
    "OBJECT_OVERHEAD_BYTES",
    "ARRAY_OVERHEAD_BYTES",
    "ELEMENT_OVERHEAD_BYTES",
    "STRING_OVERHEAD_BYTES",
    "SIZE_INT32",
    "SIZE_INT64",
    "SIZE_DOUBLE",
    "SIZE_BOOLEAN",
    "DOCUMENT_END",
    "BOOLEAN_FALSE",
    "BOOLEAN_TRUE",
]


# ── By-name dispatch ──────────────────────────────────────────
# Used by the CLI and the conformance vectors, which name readers and
# encoders as strings.

READERS: Dict[str, Callable[[ByteSpan], Read]] = {
    "byte": ByteSpan.read_byte,
    "int32": ByteSpan.read_int32,
    "int64": ByteSpan.read_int64,
    "double": ByteSpan.read_double,
    "bool": ByteSpan.read_boolean,
    "cstring": read_cstring,
    "string": read_string,
}

_ENCODERS: Dict[str, Callable[[Any], bytes]] = {
    "int32": pack_int32,
    "int64": pack_int64,
    "double": pack_double,
    "bool": lambda v: bytes([BOOLEAN_TRUE if v else BOOLEAN_FALSE]),
    "cstring": string_to_byte_array,
    "string": string_to_bson_bytes,
}


def read(span: ByteSpan, kind: str) -> Read:
    """Read one value of the named kind from `span`."""
    try:
        reader = READERS[kind]
    except KeyError:
        raise ValueError("unknown reader: {}".format(kind)) from None
    return reader(span)


def encode(kind: str, value: Any) -> bytes:
    """Wire bytes for one value of the named kind."""
    try:
        encoder = _ENCODERS[kind]
    except KeyError:
        raise ValueError("unknown encoder: {}".format(kind)) from None
    return encoder(value)
