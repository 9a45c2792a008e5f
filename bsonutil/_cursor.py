"""Bounds-checked cursors — ByteSpan for reading, WriteBuffer for writing.

ByteSpan is the only way to decode untrusted input in this package.
Every read follows the same all-or-nothing pattern:

    1. check remaining >= width, else raise ERR_INSUFFICIENT_DATA
    2. decode via the numeric codec
    3. advance offset and shrink remaining by width
    4. return Read(value, width)

Step 1 happens before any state changes, so a failed read leaves the
span exactly as it was.  Callers parsing a stream can catch the error,
wait for more bytes, and retry on a wider span.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional, Union

from ._constants import (
    BOOLEAN_FALSE,
    BOOLEAN_TRUE,
    DOCUMENT_END,
    SIZE_BOOLEAN,
    SIZE_DOUBLE,
    SIZE_INT32,
    SIZE_INT64,
    TERMINATOR,
)
from ._errors import (
    ERR_EMBEDDED_NULL,
    ERR_INSUFFICIENT_DATA,
    ERR_INVALID_BOOLEAN,
    BsonError,
)
from ._numeric import (
    pack_int32,
    read_double_le,
    read_int32_le,
    read_int64_le,
    write_double_le,
    write_int32_le,
    write_int64_le,
)
from ._text import to_wire

logger = logging.getLogger(__name__)


class Read(NamedTuple):
    """Result of a successful read: the value and how many bytes it took."""
    value: Any
    consumed: int


class ByteSpan:
    """Read-only, forward-only view over caller-owned bytes.

    The span never copies the buffer.  bytes and bytearray are held by
    plain reference and sliced per read, so no buffer export outlives a
    call: a bytearray being filled from a stream can still be extended
    while a span over it exists.  memoryview input is used as given.

    `remaining` may be smaller than the buffer when only a prefix of it
    is valid yet.  Shrinking the buffer under a live span is not
    supported.
    """

    __slots__ = ("_buf", "_start", "_offset", "_remaining")

    # Window size for the terminator scan over memoryview input.
    _SCAN_CHUNK = 256

    def __init__(self, data: Union[bytes, bytearray, memoryview],
                 remaining: Optional[int] = None, offset: int = 0) -> None:
        if isinstance(data, (bytes, bytearray)):
            buf: Union[bytes, bytearray, memoryview] = data
        else:
            buf = memoryview(data).cast("B")
        if offset < 0 or offset > len(buf):
            raise ValueError("offset {} outside buffer of {} bytes".format(
                offset, len(buf)))
        if remaining is None:
            remaining = len(buf) - offset
        if remaining < 0 or offset + remaining > len(buf):
            raise ValueError("remaining {} exceeds buffer ({} bytes from offset {})".format(
                remaining, len(buf) - offset, offset))
        self._buf = buf
        self._start = offset
        self._offset = offset
        self._remaining = remaining

    def __repr__(self) -> str:
        return "ByteSpan(offset={}, remaining={})".format(self._offset, self._remaining)

    @property
    def offset(self) -> int:
        """Position of the next unread byte in the underlying buffer."""
        return self._offset

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def consumed(self) -> int:
        """Total bytes consumed since the span was created."""
        return self._offset - self._start

    def tobytes(self) -> bytes:
        """Copy of the unread region."""
        return bytes(self._buf[self._offset:self._offset + self._remaining])

    # ── internal helpers shared with _strings ────────────────

    def _require(self, width: int, what: str) -> None:
        if self._remaining < width:
            logger.debug("short read of %s at offset %d: need %d, have %d",
                         what, self._offset, width, self._remaining)
            raise BsonError(
                ERR_INSUFFICIENT_DATA,
                "{} needs {} bytes, {} remaining".format(what, width, self._remaining),
            )

    def _advance(self, width: int) -> None:
        self._offset += width
        self._remaining -= width

    def _rewind(self, offset: int, remaining: int) -> None:
        self._offset = offset
        self._remaining = remaining

    def _find(self, byte: int) -> int:
        """Index of `byte` relative to offset within remaining, or -1."""
        needle = bytes([byte])
        end = self._offset + self._remaining
        if not isinstance(self._buf, memoryview):
            idx = self._buf.find(needle, self._offset, end)
            return idx - self._offset if idx >= 0 else -1
        # memoryview has no find(); copy one window at a time so a short
        # key costs a short copy.
        pos = self._offset
        while pos < end:
            stop = min(pos + self._SCAN_CHUNK, end)
            idx = self._buf[pos:stop].tobytes().find(needle)
            if idx >= 0:
                return pos + idx - self._offset
            pos = stop
        return -1

    # ── typed readers ────────────────────────────────────────

    def peek_byte(self) -> int:
        """Return the next byte without consuming it."""
        self._require(1, "byte")
        return self._buf[self._offset]

    def read_byte(self) -> Read:
        self._require(1, "byte")
        val = self._buf[self._offset]
        self._advance(1)
        return Read(val, 1)

    def read_int32(self) -> Read:
        self._require(SIZE_INT32, "int32")
        val, _ = read_int32_le(self._buf, self._offset)
        self._advance(SIZE_INT32)
        return Read(val, SIZE_INT32)

    def read_int64(self) -> Read:
        self._require(SIZE_INT64, "int64")
        val, _ = read_int64_le(self._buf, self._offset)
        self._advance(SIZE_INT64)
        return Read(val, SIZE_INT64)

    def read_double(self) -> Read:
        self._require(SIZE_DOUBLE, "double")
        val, _ = read_double_le(self._buf, self._offset)
        self._advance(SIZE_DOUBLE)
        return Read(val, SIZE_DOUBLE)

    def read_boolean(self) -> Read:
        """Read a boolean byte.  Only 0x00 and 0x01 are accepted.

        Any other byte is reported as ERR_INVALID_BOOLEAN rather than
        being coerced to True, and the byte is not consumed.
        """
        self._require(SIZE_BOOLEAN, "boolean")
        payload = self._buf[self._offset]
        if payload not in (BOOLEAN_FALSE, BOOLEAN_TRUE):
            logger.debug("invalid boolean 0x%02x at offset %d", payload, self._offset)
            raise BsonError(ERR_INVALID_BOOLEAN,
                            "invalid boolean byte 0x{:02x}".format(payload))
        self._advance(SIZE_BOOLEAN)
        return Read(payload == BOOLEAN_TRUE, SIZE_BOOLEAN)

    def read_bytes(self, n: int) -> Read:
        """Read exactly n raw bytes as a new bytes object."""
        if n < 0:
            raise ValueError("negative read length {}".format(n))
        self._require(n, "{}-byte block".format(n))
        val = bytes(self._buf[self._offset:self._offset + n])
        self._advance(n)
        return Read(val, n)


class WriteBuffer:
    """Caller-sized output buffer plus a write position.

    The buffer is never grown.  Writing past its end is a precondition
    violation and surfaces from struct / bytearray slicing as-is.
    """

    __slots__ = ("buf", "position")

    def __init__(self, size_or_buf: Union[int, bytearray], position: int = 0) -> None:
        if isinstance(size_or_buf, int):
            self.buf = bytearray(size_or_buf)
        else:
            self.buf = size_or_buf
        if position < 0 or position > len(self.buf):
            raise ValueError("position {} outside buffer of {} bytes".format(
                position, len(self.buf)))
        self.position = position

    def __repr__(self) -> str:
        return "WriteBuffer(size={}, position={})".format(len(self.buf), self.position)

    def getvalue(self) -> bytes:
        """Bytes written so far (from 0 to position)."""
        return bytes(self.buf[:self.position])

    def _put(self, data: bytes) -> int:
        end = self.position + len(data)
        if end > len(self.buf):
            # Slice assignment would silently grow a bytearray.
            raise IndexError("write of {} bytes at {} overruns {}-byte buffer".format(
                len(data), self.position, len(self.buf)))
        self.buf[self.position:end] = data
        self.position = end
        return len(data)

    def write_byte(self, value: int) -> int:
        return self._put(bytes([value]))

    def write_int32(self, value: int) -> int:
        self.position = write_int32_le(self.buf, self.position, value)
        return SIZE_INT32

    def write_int64(self, value: int) -> int:
        self.position = write_int64_le(self.buf, self.position, value)
        return SIZE_INT64

    def write_double(self, value: float) -> int:
        self.position = write_double_le(self.buf, self.position, value)
        return SIZE_DOUBLE

    def write_boolean(self, value: bool) -> int:
        return self._put(bytes([BOOLEAN_TRUE if value else BOOLEAN_FALSE]))

    def write_bytes(self, data: Union[bytes, bytearray, memoryview]) -> int:
        return self._put(bytes(data))

    def write_cstring(self, text: Union[str, bytes]) -> int:
        raw = to_wire(text)
        if TERMINATOR in raw:
            raise BsonError(ERR_EMBEDDED_NULL, "cstring may not contain 0x00")
        return self._put(raw + TERMINATOR)

    def write_string(self, text: Union[str, bytes]) -> int:
        """Write a length-prefixed string: int32 L, content, 0x00."""
        raw = to_wire(text)
        return self._put(pack_int32(len(raw) + 1) + raw + TERMINATOR)

    def write_document_end(self) -> int:
        return self._put(bytes([DOCUMENT_END]))
