"""String/byte transcoder — cstrings and length-prefixed BSON strings.

Two wire shapes:

    cstring      UTF-8 bytes, then 0x00.  No embedded zeros.  Used for
                 element names.
    bson string  int32 LE length L (content + terminator), then L bytes,
                 the last of which is 0x00.  Content may contain zeros.

Text is never re-validated as UTF-8.  Bytes are decoded with the
surrogateescape handler, so whatever arrived on the wire comes back out
byte-for-byte when the text is encoded the same way.
"""

from __future__ import annotations

import logging
from typing import Union

from ._constants import SIZE_INT32, STRING_OVERHEAD_BYTES, TERMINATOR
from ._cursor import ByteSpan, Read
from ._errors import (
    ERR_BAD_STRING,
    ERR_EMBEDDED_NULL,
    ERR_MISSING_TERMINATOR,
    BsonError,
)
from ._numeric import pack_int32
from ._text import decode_text, encode_text, to_wire

logger = logging.getLogger(__name__)


# ── Decoding from a span ──────────────────────────────────────

def read_cstring(span: ByteSpan) -> Read:
    """Read a null-terminated string.

    Consumes the content plus its terminator.  If no 0x00 occurs within
    the span's remaining bytes, raises ERR_MISSING_TERMINATOR and leaves
    the span untouched.
    """
    n = span._find(0x00)
    if n < 0:
        logger.debug("no cstring terminator within %d bytes at offset %d",
                     span.remaining, span.offset)
        raise BsonError(ERR_MISSING_TERMINATOR,
                        "no terminator within {} bytes".format(span.remaining))
    raw, _ = span.read_bytes(n + 1)
    return Read(decode_text(raw[:-1]), n + 1)


def read_string(span: ByteSpan, raw: bool = False) -> Read:
    """Read a length-prefixed BSON string.

    Returns the content without its terminator, as str (or bytes when
    raw=True).  Embedded zeros are kept.  consumed is always 4 + L.

    A short prefix raises ERR_INSUFFICIENT_DATA; every other problem
    (L < 1, L past the end, last byte not 0x00) raises ERR_BAD_STRING.
    Either way the span is restored to where it started.
    """
    offset, remaining = span.offset, span.remaining
    length, _ = span.read_int32()
    try:
        if length < 1:
            raise BsonError(ERR_BAD_STRING, "string length {} < 1".format(length))
        if length > span.remaining:
            raise BsonError(
                ERR_BAD_STRING,
                "string length {} exceeds {} remaining".format(length, span.remaining),
            )
        body, _ = span.read_bytes(length)
        if body[-1] != 0x00:
            raise BsonError(ERR_BAD_STRING,
                            "string not terminated (last byte 0x{:02x})".format(body[-1]))
    except BsonError as e:
        logger.debug("bad string at offset %d: %s", offset, e)
        span._rewind(offset, remaining)
        raise
    content = body[:-1]
    return Read(content if raw else decode_text(content), SIZE_INT32 + length)


# ── Byte array <-> text ───────────────────────────────────────

def string_to_byte_array(text: str) -> bytes:
    """UTF-8 bytes of `text` followed by a 0x00 terminator (cstring)."""
    data = encode_text(text)
    if TERMINATOR in data:
        raise BsonError(ERR_EMBEDDED_NULL, "cstring text contains U+0000")
    return data + TERMINATOR


def byte_array_to_string(data: Union[bytes, bytearray, memoryview]) -> str:
    """Text of a cstring's bytes, up to the first 0x00 if there is one."""
    data = bytes(data)
    end = data.find(TERMINATOR)
    return decode_text(data if end < 0 else data[:end])


def byte_array_to_bson_string(data: Union[bytes, bytearray, memoryview],
                              length: int) -> str:
    """Text of the first `length` bytes of `data`; zeros are kept."""
    if length < 0 or length > len(data):
        raise BsonError(ERR_BAD_STRING, "length {} outside {}-byte array".format(
            length, len(data)))
    return decode_text(bytes(data[:length]))


def string_to_bson_bytes(text: Union[str, bytes]) -> bytes:
    """Full length-prefixed shape: int32 L, content, 0x00."""
    data = to_wire(text)
    return pack_int32(len(data) + 1) + data + TERMINATOR


def string_value_size(text: Union[str, bytes]) -> int:
    """Bytes a length-prefixed string value occupies on the wire."""
    data = to_wire(text)
    return STRING_OVERHEAD_BYTES + len(data)
