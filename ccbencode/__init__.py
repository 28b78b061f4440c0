"""ccBencode - Bencode byte strings and a reference codec."""

from __future__ import annotations

from ccbencode.bencode import (
    BencodeDecoder,
    BencodeEncoder,
    decode,
    dump,
    encode,
    load,
)
from ccbencode.bstring import DEFAULT_ENCODING, BString
from ccbencode.exceptions import (
    BencodeDecodeError,
    BencodeEncodeError,
    BencodeError,
    CCBencodeError,
    EncodingMismatchError,
    InvalidArgumentError,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ENCODING",
    "BString",
    "BencodeDecodeError",
    "BencodeDecoder",
    "BencodeEncodeError",
    "BencodeEncoder",
    "BencodeError",
    "CCBencodeError",
    "EncodingMismatchError",
    "InvalidArgumentError",
    "__version__",
    "decode",
    "dump",
    "encode",
    "load",
]
