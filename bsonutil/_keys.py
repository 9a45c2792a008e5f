"""Array-index keys and key/size pre-computation.

BSON arrays are documents whose keys are the element indexes written in
decimal: ["a", "b"] is stored as {"0": "a", "1": "b"}.  The document
layer sizes its output buffer before writing, so it needs the byte cost
of each key without building the key first.

Invariant: array_key_size(i) == object_key_size(index_to_key(i)) for
every non-negative i.
"""

from __future__ import annotations

from typing import Union

from ._constants import ELEMENT_OVERHEAD_BYTES, TERMINATOR
from ._errors import ERR_RANGE, BsonError
from ._text import to_wire


def _check_non_negative(value: int, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise BsonError(ERR_RANGE, "{} must be int, got {}".format(
            label, type(value).__name__))
    if value < 0:
        raise BsonError(ERR_RANGE, "{} must be non-negative: {}".format(label, value))


def index_to_key(index: int) -> bytes:
    """Decimal ASCII key for an array index, as a cstring.

    >>> index_to_key(42)
    b'42\\x00'
    """
    _check_non_negative(index, "index")
    return str(index).encode("ascii") + TERMINATOR


def digits(value: int) -> int:
    """Number of decimal digits needed to print a non-negative integer."""
    _check_non_negative(value, "value")
    n = 1
    while value >= 10:
        value //= 10
        n += 1
    return n


def object_key_size(key: Union[str, bytes]) -> int:
    """Wire size of an element key: key bytes + terminator + type tag.

    Keys are measured the way a cstring is read back, up to the first
    0x00, so a terminated key from index_to_key measures the same as
    its bare text.
    """
    raw = to_wire(key)
    end = raw.find(TERMINATOR)
    n = len(raw) if end < 0 else end
    return n + len(TERMINATOR) + ELEMENT_OVERHEAD_BYTES


def array_key_size(index: int) -> int:
    """Same as object_key_size(index_to_key(index)), without the key."""
    return digits(index) + len(TERMINATOR) + ELEMENT_OVERHEAD_BYTES
