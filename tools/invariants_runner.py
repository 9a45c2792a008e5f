#!/usr/bin/env python3
# tools/invariants_runner.py
#
# Randomized invariant checks for bsonutil.
#
# This runner:
# - round-trips random int32/int64 values and random 8-byte double patterns
# - checks array_key_size(i) == object_key_size(index_to_key(i)) over a wide
#   spread of indexes
# - feeds random (often truncated or corrupt) buffers to every reader and
#   checks that a failed read leaves the span untouched and a successful one
#   advances it by exactly the reported byte count
#
# Exit code:
#   0 -> all checks passed
#   1 -> invariant violation

import os, sys, random, struct
from typing import List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from bsonutil import (
    READERS,
    BsonError,
    ByteSpan,
    array_key_size,
    digits,
    index_to_key,
    object_key_size,
    pack_double,
    pack_int32,
    pack_int64,
    read,
    string_to_bson_bytes,
    string_to_byte_array,
    unpack_double,
    unpack_int32,
    unpack_int64,
)

SEED = int(os.environ.get("BSONUTIL_SEED", "1337"))
TRIALS = int(os.environ.get("BSONUTIL_TRIALS", "2000"))
MAX_INDEX = int(os.environ.get("BSONUTIL_MAX_INDEX", str(10**12)))
MAX_BUF = int(os.environ.get("BSONUTIL_MAX_BUF", "16"))

random.seed(SEED)

def fail(label: str, **ctx) -> None:
    print("INVARIANT FAIL:", label)
    for k, v in ctx.items():
        print("  {} = {!r}".format(k, v))
    raise SystemExit(1)

def rand_index() -> int:
    # Bias toward digit-count boundaries (9/10, 99/100, ...).
    if random.random() < 0.3:
        k = random.randint(1, len(str(MAX_INDEX)))
        return max(0, 10**k + random.choice([-1, 0, 1]))
    return random.randint(0, MAX_INDEX)

def rand_text() -> str:
    out = []
    for _ in range(random.randint(0, 8)):
        r = random.random()
        if r < 0.8:
            out.append(chr(random.randint(0x20, 0x7E)))
        else:
            out.append(chr(random.randint(0xA0, 0xD7FF)))
    return "".join(out)

def rand_buffer() -> bytes:
    """Either a valid encoding, a truncation of one, or random bytes."""
    r = random.random()
    if r < 0.4:
        val = random.choice([
            pack_int32(random.randint(-(2**31), 2**31 - 1)),
            pack_int64(random.randint(-(2**63), 2**63 - 1)),
            string_to_bson_bytes(rand_text()),
            string_to_byte_array(rand_text().replace("\x00", "")),
            bytes([random.choice([0, 1, 2])]),
        ])
        if random.random() < 0.5:
            val = val[:random.randint(0, len(val))]
        return val
    return bytes(random.getrandbits(8) for _ in range(random.randint(0, MAX_BUF)))

def check_numeric() -> None:
    v32 = random.randint(-(2**31), 2**31 - 1)
    if unpack_int32(pack_int32(v32)) != v32:
        fail("int32 round trip", value=v32)
    v64 = random.randint(-(2**63), 2**63 - 1)
    if unpack_int64(pack_int64(v64)) != v64:
        fail("int64 round trip", value=v64)
    raw = struct.pack("<Q", random.getrandbits(64))
    if pack_double(unpack_double(raw)) != raw:
        fail("double bit pattern round trip", raw=raw.hex())

def check_keys() -> None:
    i = rand_index()
    if array_key_size(i) != object_key_size(index_to_key(i)):
        fail("array_key_size != object_key_size(index_to_key)", index=i)
    if digits(i) != len(str(i)):
        fail("digits", index=i)

def check_readers(kinds: List[str]) -> None:
    data = rand_buffer()
    remaining = random.randint(0, len(data))
    for kind in kinds:
        span = ByteSpan(data, remaining=remaining)
        try:
            result = read(span, kind)
        except BsonError:
            if span.offset != 0 or span.remaining != remaining:
                fail("failed read moved the span", kind=kind, data=data.hex(),
                     remaining=remaining, span=span)
            continue
        if span.offset != result.consumed or span.remaining != remaining - result.consumed:
            fail("successful read advanced by the wrong amount", kind=kind,
                 data=data.hex(), remaining=remaining, consumed=result.consumed, span=span)

def main() -> int:
    kinds = sorted(READERS)
    for _ in range(TRIALS):
        check_numeric()
        check_keys()
        check_readers(kinds)

    print(f"OK: invariants passed for TRIALS={TRIALS} seed={SEED}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
