"""UTF-8 pass-through between wire bytes and str.

Wire text is never validated.  Decoding uses surrogateescape so any byte
sequence survives a str round trip.  The only str that cannot go back to
bytes is one holding a lone surrogate outside the escape range
(U+D800–U+DC7F, U+DD00–U+DFFF); that is reported as ERR_BAD_TEXT.
"""

from __future__ import annotations

from typing import Union

from ._errors import ERR_BAD_TEXT, BsonError

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def decode_text(raw: Union[bytes, bytearray]) -> str:
    return raw.decode(_ENCODING, _ERRORS)


def encode_text(text: str) -> bytes:
    try:
        return text.encode(_ENCODING, _ERRORS)
    except UnicodeEncodeError as e:
        raise BsonError(
            ERR_BAD_TEXT,
            "U+{:04X} at index {} cannot be encoded".format(ord(text[e.start]), e.start),
        ) from None


def to_wire(text: Union[str, bytes, bytearray, memoryview]) -> bytes:
    """Bytes of str or bytes-like input, unchanged for the latter."""
    return encode_text(text) if isinstance(text, str) else bytes(text)
