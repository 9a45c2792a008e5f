"""Numeric LE codec — fixed-width int32, int64 and double.

All three are little-endian.  Integers are two's complement; doubles are
the raw IEEE-754 binary64 bit pattern, so every 8-byte sequence is a
legal double (NaN payloads and the sign of zero survive a round trip).

The read_*_le helpers are unchecked: they assume the caller has already
verified that the bytes are there.  ByteSpan does that check; nothing
outside this package should call them directly on untrusted input.
"""

from __future__ import annotations

import struct
from typing import Tuple, Union

from ._constants import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from ._errors import ERR_RANGE, BsonError

Buffer = Union[bytes, bytearray, memoryview]

INT32_STRUCT = struct.Struct("<i")
INT64_STRUCT = struct.Struct("<q")
DOUBLE_STRUCT = struct.Struct("<d")


def _check_int(value: int, lo: int, hi: int, label: str) -> None:
    # bool is an int subclass; True must not silently become 1 here.
    if isinstance(value, bool) or not isinstance(value, int):
        raise BsonError(ERR_RANGE, "{} expects int, got {}".format(
            label, type(value).__name__))
    if value < lo or value > hi:
        raise BsonError(ERR_RANGE, "{} out of range: {}".format(label, value))


# ── Writers ───────────────────────────────────────────────────
# Each returns the advanced position.  Capacity is the caller's job:
# pack_into on a too-short buffer raises struct.error.

def write_int32_le(buf: bytearray, pos: int, value: int) -> int:
    _check_int(value, INT32_MIN, INT32_MAX, "int32")
    INT32_STRUCT.pack_into(buf, pos, value)
    return pos + INT32_STRUCT.size


def write_int64_le(buf: bytearray, pos: int, value: int) -> int:
    _check_int(value, INT64_MIN, INT64_MAX, "int64")
    INT64_STRUCT.pack_into(buf, pos, value)
    return pos + INT64_STRUCT.size


def write_double_le(buf: bytearray, pos: int, value: float) -> int:
    DOUBLE_STRUCT.pack_into(buf, pos, value)
    return pos + DOUBLE_STRUCT.size


# ── Unchecked readers ─────────────────────────────────────────

def read_int32_le(buf: Buffer, off: int) -> Tuple[int, int]:
    return INT32_STRUCT.unpack_from(buf, off)[0], off + INT32_STRUCT.size


def read_int64_le(buf: Buffer, off: int) -> Tuple[int, int]:
    return INT64_STRUCT.unpack_from(buf, off)[0], off + INT64_STRUCT.size


def read_double_le(buf: Buffer, off: int) -> Tuple[float, int]:
    return DOUBLE_STRUCT.unpack_from(buf, off)[0], off + DOUBLE_STRUCT.size


# ── Standalone values ─────────────────────────────────────────

def pack_int32(value: int) -> bytes:
    _check_int(value, INT32_MIN, INT32_MAX, "int32")
    return INT32_STRUCT.pack(value)


def pack_int64(value: int) -> bytes:
    _check_int(value, INT64_MIN, INT64_MAX, "int64")
    return INT64_STRUCT.pack(value)


def pack_double(value: float) -> bytes:
    return DOUBLE_STRUCT.pack(value)


def unpack_int32(data: Buffer) -> int:
    """Decode exactly 4 bytes.  struct.error on any other length."""
    return INT32_STRUCT.unpack(data)[0]


def unpack_int64(data: Buffer) -> int:
    return INT64_STRUCT.unpack(data)[0]


def unpack_double(data: Buffer) -> float:
    return DOUBLE_STRUCT.unpack(data)[0]
