"""Bencode byte strings.

A :class:`BString` owns an immutable byte buffer together with the name of the
text encoding used to render it. Identity is decided by the bytes alone: the
encoding is a rendering hint, so two instances holding the same bytes are
equal (and hash equal) whatever encoding they carry.

Wire format::

    <ASCII decimal byte length>:<raw bytes>
"""

from __future__ import annotations

import codecs
from functools import total_ordering
from typing import TYPE_CHECKING, Any, BinaryIO

from ccbencode.exceptions import EncodingMismatchError, InvalidArgumentError

if TYPE_CHECKING:
    import asyncio

DEFAULT_ENCODING = "utf-8"

_SEPARATOR = b":"
_BYTES_LIKE = (bytes, bytearray, memoryview)


def normalize_encoding(encoding: str) -> str:
    """Return the canonical codec name for ``encoding``.

    Raises:
        InvalidArgumentError: If the encoding is missing, unknown, or not a
            bytes-to-text codec (e.g. ``base64``).

    """
    if not encoding or not isinstance(encoding, str):
        msg = "Encoding name must be a non-empty string"
        raise InvalidArgumentError(msg, {"encoding": encoding})
    try:
        info = codecs.lookup(encoding)
    except LookupError as e:
        msg = f"Unknown text encoding: {encoding}"
        raise InvalidArgumentError(msg, {"encoding": encoding}) from e
    # bytes-to-bytes and str-to-str codecs (hex, base64, rot13) are flagged false
    if not getattr(info, "_is_text_encoding", True):
        msg = f"Not a text encoding: {encoding}"
        raise InvalidArgumentError(msg, {"encoding": encoding})
    return info.name


@total_ordering
class BString:
    """Length-prefixed, encoding-aware bencode byte string.

    Compares equal to ``BString``, bytes-like values and text, but hashes like
    its raw bytes. A non-ASCII ``str`` can therefore equal a key without
    finding it in a dict or set; index decoded dictionaries with bytes.
    """

    __slots__ = ("_encoding", "_value")

    def __init__(
        self,
        value: str | bytes | bytearray | memoryview = b"",
        encoding: str = DEFAULT_ENCODING,
    ):
        """Initialize from text or raw bytes.

        Prefer :meth:`from_text` and :meth:`from_bytes`, which keep the
        text/bytes distinction visible at the call site.
        """
        if isinstance(value, str):
            source = self.from_text(value, encoding)
        else:
            source = self.from_bytes(value, encoding)
        object.__setattr__(self, "_value", source.value)
        object.__setattr__(self, "_encoding", source.encoding)

    @classmethod
    def from_text(
        cls,
        text: str,
        encoding: str = DEFAULT_ENCODING,
        errors: str = "replace",
    ) -> BString:
        """Create a byte string by encoding ``text`` with ``encoding``.

        Characters the codec cannot represent are handled according to
        ``errors``; the default replaces them so construction does not fail on
        content.
        """
        if text is None:
            msg = "Text value must not be None"
            raise InvalidArgumentError(msg)
        if not isinstance(text, str):
            msg = f"Expected str, got {type(text).__name__}"
            raise InvalidArgumentError(msg, {"type": type(text).__name__})
        name = normalize_encoding(encoding)
        try:
            raw = text.encode(name, errors)
        except UnicodeError as e:
            msg = f"Text cannot be encoded as {name}"
            raise EncodingMismatchError(msg, {"encoding": name}) from e
        return cls._create(raw, name)

    @classmethod
    def from_bytes(
        cls,
        value: bytes | bytearray | memoryview,
        encoding: str = DEFAULT_ENCODING,
    ) -> BString:
        """Create a byte string holding ``value`` verbatim."""
        return cls._create(_coerce_bytes(value), normalize_encoding(encoding))

    @classmethod
    def _create(cls, raw: bytes, encoding: str) -> BString:
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_value", raw)
        object.__setattr__(instance, "_encoding", encoding)
        return instance

    @property
    def value(self) -> bytes:
        """Raw bytes."""
        return self._value

    @property
    def encoding(self) -> str:
        """Default encoding used when rendering as text."""
        return self._encoding

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __len__(self) -> int:
        return len(self._value)

    def __bytes__(self) -> bytes:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BString):
            return self._value == other._value
        if isinstance(other, str):
            try:
                return self._value == other.encode(self._encoding, "replace")
            except UnicodeError:
                return False
        if isinstance(other, _BYTES_LIKE):
            return self._value == bytes(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, BString):
            return self._value < other._value
        if isinstance(other, _BYTES_LIKE):
            return self._value < bytes(other)
        return NotImplemented

    def __hash__(self) -> int:
        # Same hash as the raw bytes so BString and bytes keys interoperate.
        # Not the hash of equal text: look up decoded dicts by bytes, not str.
        return hash(self._value)

    def __repr__(self) -> str:
        return f"BString({self._value!r}, encoding={self._encoding!r})"

    def __str__(self) -> str:
        return self.to_text()

    def __reduce__(self):
        return (type(self).from_bytes, (self._value, self._encoding))

    def to_text(self, encoding: str | None = None, errors: str = "strict") -> str:
        """Decode the raw bytes as text.

        Args:
            encoding: Codec to use, defaults to the instance's own encoding.
            errors: Codec error handler.

        Raises:
            EncodingMismatchError: If the bytes are not valid under ``encoding``.

        """
        name = self._encoding if encoding is None else normalize_encoding(encoding)
        try:
            return self._value.decode(name, errors)
        except UnicodeError as e:
            msg = f"Bytes are not valid {name}"
            raise EncodingMismatchError(
                msg,
                {
                    "encoding": name,
                    "position": getattr(e, "start", None),
                    "reason": getattr(e, "reason", str(e)),
                },
            ) from e

    def encode_as_text(self, encoding: str | None = None) -> str:
        """Return the bencode token as text, e.g. ``"4:spam"``.

        The prefix is the byte length, not the character count.
        """
        return f"{len(self._value)}:{self.to_text(encoding)}"

    def encode(self) -> bytes:
        """Return the bencode token as bytes."""
        return self._prefix() + self._value

    def encode_to(self, stream: BinaryIO) -> int:
        """Write the bencode token to a binary stream.

        Returns:
            Number of bytes written.

        """
        token = self.encode()
        stream.write(token)
        return len(token)

    async def encode_to_writer(self, writer: asyncio.StreamWriter) -> int:
        """Write the bencode token to an asyncio writer and drain it."""
        token = self.encode()
        writer.write(token)
        await writer.drain()
        return len(token)

    def _prefix(self) -> bytes:
        return str(len(self._value)).encode("ascii") + _SEPARATOR


def _coerce_bytes(value: Any) -> bytes:
    if value is None:
        msg = "Byte value must not be None"
        raise InvalidArgumentError(msg)
    if not isinstance(value, _BYTES_LIKE):
        msg = f"Expected bytes-like value, got {type(value).__name__}"
        raise InvalidArgumentError(msg, {"type": type(value).__name__})
    return bytes(value)
