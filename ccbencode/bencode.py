"""Bencode decoder and encoder built on :class:`~ccbencode.bstring.BString`.

String tokens are always materialized through :meth:`BString.from_bytes` and
emitted through :meth:`BString.encode_to`; this module owns the token grammar
(length prefixes, ``i``/``l``/``d`` markers) and its validation.
"""

from __future__ import annotations

import io
import logging
from typing import Any, BinaryIO, Union

from ccbencode.bstring import DEFAULT_ENCODING, BString, normalize_encoding
from ccbencode.exceptions import BencodeDecodeError, BencodeEncodeError

logger = logging.getLogger(__name__)

BencodeValue = Union[BString, int, list, dict]

_DIGITS = b"0123456789"


class BencodeDecoder:
    """Decoder for bencoded data held in memory."""

    def __init__(self, data: bytes | bytearray | memoryview, encoding: str = DEFAULT_ENCODING):
        """Initialize decoder.

        Args:
            data: Bencoded input.
            encoding: Encoding attached to every decoded :class:`BString`.

        """
        self.data = bytes(data)
        self.encoding = normalize_encoding(encoding)
        self.pos = 0

    def decode(self) -> BencodeValue:
        """Decode the next value starting at :attr:`pos`."""
        token = self._peek()
        if token == b"":
            self._fail("Unexpected end of data")
        if token == b"i":
            return self._decode_int()
        if token == b"l":
            return self._decode_list()
        if token == b"d":
            return self._decode_dict()
        if token in _DIGITS:
            return self.decode_string()
        self._fail(f"Invalid token {token!r}")
        return None  # pragma: no cover

    def decode_string(self) -> BString:
        """Decode a ``<length>:<bytes>`` token."""
        colon = self.data.find(b":", self.pos)
        if colon == -1:
            self._fail("Missing ':' after string length")
        length = self._parse_number(self.data[self.pos : colon], "string length")
        if length < 0:
            self._fail("Negative string length")
        start = colon + 1
        end = start + length
        if end > len(self.data):
            self._fail(
                f"String length {length} exceeds remaining {len(self.data) - start} bytes",
            )
        self.pos = end
        return BString.from_bytes(self.data[start:end], self.encoding)

    def _decode_int(self) -> int:
        end = self.data.find(b"e", self.pos + 1)
        if end == -1:
            self._fail("Unterminated integer")
        value = self._parse_number(self.data[self.pos + 1 : end], "integer")
        self.pos = end + 1
        return value

    def _decode_list(self) -> list:
        self.pos += 1
        result: list = []
        while self._peek() != b"e":
            if self._peek() == b"":
                self._fail("Unterminated list")
            result.append(self.decode())
        self.pos += 1
        return result

    def _decode_dict(self) -> dict[BString, Any]:
        self.pos += 1
        result: dict[BString, Any] = {}
        while self._peek() != b"e":
            token = self._peek()
            if token == b"":
                self._fail("Unterminated dictionary")
            if token not in _DIGITS:
                self._fail("Dictionary keys must be strings")
            key = self.decode_string()
            result[key] = self.decode()
        self.pos += 1
        return result

    def _parse_number(self, raw: bytes, what: str) -> int:
        digits = raw[1:] if raw.startswith(b"-") else raw
        if not digits or not all(c in _DIGITS for c in digits):
            self._fail(f"Invalid {what}: {raw!r}")
        if len(digits) > 1 and digits.startswith(b"0"):
            self._fail(f"Leading zero in {what}: {raw!r}")
        if raw == b"-0":
            self._fail(f"Negative zero in {what}")
        return int(raw)

    def _peek(self) -> bytes:
        return self.data[self.pos : self.pos + 1]

    def _fail(self, message: str) -> None:
        logger.debug("Bencode decode failed at %d: %s", self.pos, message)
        raise BencodeDecodeError(message, {"position": self.pos})


class BencodeEncoder:
    """Encoder producing canonical bencode (dictionary keys sorted by raw bytes)."""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        """Initialize encoder.

        Args:
            encoding: Encoding used to turn ``str`` values and keys into bytes.

        """
        self.encoding = normalize_encoding(encoding)

    def encode(self, obj: Any) -> bytes:
        """Encode ``obj`` and return the bencoded bytes."""
        buffer = io.BytesIO()
        self.encode_to(obj, buffer)
        return buffer.getvalue()

    def encode_to(self, obj: Any, stream: BinaryIO) -> None:
        """Encode ``obj`` directly into a binary stream."""
        if isinstance(obj, (BString, bytes, bytearray, memoryview, str)):
            self._to_bstring(obj).encode_to(stream)
        elif isinstance(obj, bool):
            self._fail(f"Cannot encode boolean value {obj!r}")
        elif isinstance(obj, int):
            stream.write(b"i%de" % obj)
        elif isinstance(obj, (list, tuple)):
            stream.write(b"l")
            for item in obj:
                self.encode_to(item, stream)
            stream.write(b"e")
        elif isinstance(obj, dict):
            stream.write(b"d")
            items = [(self._key(k), v) for k, v in obj.items()]
            for key, value in sorted(items, key=lambda item: item[0].value):
                key.encode_to(stream)
                self.encode_to(value, stream)
            stream.write(b"e")
        else:
            self._fail(f"Cannot encode value of type {type(obj).__name__}")

    def _key(self, key: Any) -> BString:
        if not isinstance(key, (BString, bytes, bytearray, memoryview, str)):
            self._fail(f"Dictionary keys must be strings, got {type(key).__name__}")
        return self._to_bstring(key)

    def _to_bstring(self, value: BString | bytes | bytearray | memoryview | str) -> BString:
        if isinstance(value, BString):
            return value
        if isinstance(value, str):
            return BString.from_text(value, self.encoding)
        return BString.from_bytes(value, self.encoding)

    def _fail(self, message: str) -> None:
        logger.debug("Bencode encode failed: %s", message)
        raise BencodeEncodeError(message)


def decode(data: bytes | bytearray | memoryview, encoding: str = DEFAULT_ENCODING) -> BencodeValue:
    """Decode a complete bencoded value, rejecting trailing data."""
    decoder = BencodeDecoder(data, encoding)
    result = decoder.decode()
    if decoder.pos != len(decoder.data):
        msg = f"Trailing data after position {decoder.pos}"
        raise BencodeDecodeError(msg, {"position": decoder.pos})
    return result


def encode(obj: Any, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Encode ``obj`` to bencoded bytes."""
    return BencodeEncoder(encoding).encode(obj)


def load(fp: BinaryIO, encoding: str = DEFAULT_ENCODING) -> BencodeValue:
    """Decode a bencoded value from a binary file object."""
    return decode(fp.read(), encoding)


def dump(obj: Any, fp: BinaryIO, encoding: str = DEFAULT_ENCODING) -> None:
    """Encode ``obj`` into a binary file object."""
    BencodeEncoder(encoding).encode_to(obj, fp)
