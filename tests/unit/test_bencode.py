"""Tests for the bencode decoder and encoder."""

from __future__ import annotations

import io

import pytest

from ccbencode.bencode import (
    BencodeDecoder,
    BencodeEncoder,
    decode,
    dump,
    encode,
    load,
)
from ccbencode.bstring import BString
from ccbencode.exceptions import BencodeDecodeError, BencodeEncodeError, BencodeError

pytestmark = [pytest.mark.unit, pytest.mark.codec]


class TestBencodeDecoder:
    """Test cases for BencodeDecoder."""

    def test_decode_string(self):
        """Test decoding bencoded strings."""
        decoder = BencodeDecoder(b"6:coding")
        assert decoder.decode() == b"coding"

        decoder = BencodeDecoder(b"0:")
        assert decoder.decode() == b""

        decoder = BencodeDecoder(b"11:hello world")
        assert decoder.decode() == b"hello world"

    def test_decode_string_returns_bstring(self):
        """Strings are materialized as BString carrying the decoder's encoding."""
        result = BencodeDecoder(b"4:spam", encoding="ascii").decode()
        assert isinstance(result, BString)
        assert result.encoding == "ascii"
        assert result == "spam"

    def test_decode_string_keeps_raw_bytes(self):
        """Binary content is never validated or transformed."""
        result = decode(b"3:\xff\x00\xfe")
        assert result.value == b"\xff\x00\xfe"

    def test_decode_integer(self):
        """Test decoding bencoded integers."""
        assert BencodeDecoder(b"i100e").decode() == 100
        assert BencodeDecoder(b"i0e").decode() == 0
        assert BencodeDecoder(b"i-50e").decode() == -50
        assert BencodeDecoder(b"i999999999999999999999e").decode() == 999999999999999999999

    def test_decode_list(self):
        """Test decoding bencoded lists."""
        decoder = BencodeDecoder(b"l6:Coding10:Challengese")
        assert decoder.decode() == [b"Coding", b"Challenges"]

        decoder = BencodeDecoder(b"le")
        assert decoder.decode() == []

        decoder = BencodeDecoder(b"l6:codingi100e0:lee")
        assert decoder.decode() == [b"coding", 100, b"", []]

    def test_decode_dict(self):
        """Test decoding bencoded dictionaries."""
        decoder = BencodeDecoder(
            b"d6:Coding10:Challenges8:website:20:codingchallenges.fyie",
        )
        expected = {
            b"Coding": b"Challenges",
            b"website:": b"codingchallenges.fyi",
        }
        assert decoder.decode() == expected

        decoder = BencodeDecoder(b"de")
        assert decoder.decode() == {}

        decoder = BencodeDecoder(
            b"d17:Coding Challengesd6:Rating7:Awesome8:website:20:codingchallenges.fyieee",
        )
        expected = {
            b"Coding Challenges": {
                b"Rating": b"Awesome",
                b"website:": b"codingchallenges.fyi",
            },
        }
        assert decoder.decode() == expected

    def test_decode_dict_lookup_by_bytes_and_text(self):
        """Decoded keys can be looked up with bytes or compared with text."""
        result = decode(b"d8:announce3:urle")
        assert result[b"announce"] == "url"
        assert next(iter(result)) == "announce"

    def test_decoder_position(self):
        """Decoder position advances past each value."""
        decoder = BencodeDecoder(b"4:spami3e")
        assert decoder.decode() == b"spam"
        assert decoder.pos == 6
        assert decoder.decode() == 3
        assert decoder.pos == len(decoder.data)

    @pytest.mark.parametrize(
        "data",
        [
            b"i100",  # no 'e'
            b"i03e",  # leading zero
            b"i-e",  # sign only
            b"i-0e",  # negative zero
            b"ie",  # empty integer
            b"i1x2e",  # not a number
            b"6coding",  # missing colon
            b"6:code",  # claims 6, has 4
            b"06:coding",  # leading zero in length
            b"",  # empty input
            b"x",  # unknown token
            b"l4:spam",  # unterminated list
            b"d4:spam",  # missing value
            b"d3:key",  # unterminated dictionary
            b"di1e4:spame",  # integer key
        ],
    )
    def test_decode_errors(self, data):
        """Test decoding error cases."""
        decoder = BencodeDecoder(data)
        with pytest.raises(BencodeDecodeError):
            decoder.decode()

    def test_decode_error_reports_position(self):
        with pytest.raises(BencodeDecodeError) as exc_info:
            decode(b"l4:spami03ee")
        assert exc_info.value.details["position"] == 7
        assert isinstance(exc_info.value, BencodeError)

    def test_decode_complex_nested(self):
        """Test complex nested structures."""
        data = b"d8:announce40:http://tracker.example.com:6969/announce7:comment12:Test torrente"
        result = BencodeDecoder(data).decode()

        expected = {
            b"announce": b"http://tracker.example.com:6969/announce",
            b"comment": b"Test torrent",
        }
        assert result == expected


class TestBencodeEncoder:
    """Test cases for BencodeEncoder."""

    def test_encode_string(self):
        """Test encoding strings."""
        encoder = BencodeEncoder()
        assert encoder.encode(b"coding") == b"6:coding"
        assert encoder.encode(b"") == b"0:"
        assert encoder.encode(b"hello world") == b"11:hello world"

    def test_encode_bstring_uses_raw_bytes(self):
        """BString values are written verbatim regardless of encoder encoding."""
        encoder = BencodeEncoder("ascii")
        value = BString.from_text("ñ", "iso-8859-1")
        assert encoder.encode(value) == b"1:\xf1"

    def test_encode_text_uses_encoder_encoding(self):
        assert BencodeEncoder().encode("ñ") == b"2:\xc3\xb1"
        assert BencodeEncoder("iso-8859-1").encode("ñ") == b"1:\xf1"

    def test_encode_integer(self):
        """Test encoding integers."""
        encoder = BencodeEncoder()
        assert encoder.encode(100) == b"i100e"
        assert encoder.encode(0) == b"i0e"
        assert encoder.encode(-50) == b"i-50e"
        assert encoder.encode(999999999999999999999) == b"i999999999999999999999e"

    def test_encode_list(self):
        """Test encoding lists."""
        encoder = BencodeEncoder()
        assert encoder.encode([b"Coding", b"Challenges"]) == b"l6:Coding10:Challengese"
        assert encoder.encode([]) == b"le"
        assert encoder.encode([b"coding", 100, b"", []]) == b"l6:codingi100e0:lee"
        assert encoder.encode((b"a", 1)) == b"l1:ai1ee"

    def test_encode_dict(self):
        """Test encoding dictionaries."""
        encoder = BencodeEncoder()

        data = {
            b"Coding": b"Challenges",
            b"website:": b"codingchallenges.fyi",
        }
        result = encoder.encode(data)
        assert result == b"d6:Coding10:Challenges8:website:20:codingchallenges.fyie"

        assert encoder.encode({}) == b"de"

        data = {
            b"Coding Challenges": {
                b"Rating": b"Awesome",
                b"website:": b"codingchallenges.fyi",
            },
        }
        expected = b"d17:Coding Challengesd6:Rating7:Awesome8:website:20:codingchallenges.fyiee"
        assert encoder.encode(data) == expected

    def test_encode_string_keys(self):
        """Test encoding dictionaries with string keys."""
        data = {
            "Coding": "Challenges",
            "website:": "codingchallenges.fyi",
        }
        expected = b"d6:Coding10:Challenges8:website:20:codingchallenges.fyie"
        assert BencodeEncoder().encode(data) == expected

    def test_encode_key_ordering(self):
        """Keys are sorted by raw bytes."""
        data = {b"zebra": 1, BString.from_text("apple"): 2, "banana": 3}
        assert BencodeEncoder().encode(data) == b"d5:applei2e6:bananai3e5:zebrai1ee"

    def test_encode_to_stream(self):
        stream = io.BytesIO()
        BencodeEncoder().encode_to([b"spam", 1], stream)
        assert stream.getvalue() == b"l4:spami1ee"

    @pytest.mark.parametrize(
        "value",
        [3.14, None, True, {123: "value"}, {b"key": object()}, {"a", "b"}],
    )
    def test_encode_errors(self, value):
        """Test encoding error cases."""
        with pytest.raises(BencodeEncodeError):
            BencodeEncoder().encode(value)


class TestConvenienceFunctions:
    """Test convenience functions."""

    def test_decode_function(self):
        assert decode(b"6:coding") == b"coding"
        assert decode(b"i100e") == 100
        assert decode(b"l6:Coding10:Challengese") == [b"Coding", b"Challenges"]
        data = {b"test": b"value"}
        assert decode(encode(data)) == data

    def test_decode_rejects_trailing_data(self):
        with pytest.raises(BencodeDecodeError):
            decode(b"i1ei2e")

    def test_encode_function(self):
        assert encode(b"coding") == b"6:coding"
        assert encode(100) == b"i100e"
        assert encode([b"Coding", b"Challenges"]) == b"l6:Coding10:Challengese"
        assert encode({b"test": b"value"}) == b"d4:test5:valuee"

    def test_load_and_dump(self, tmp_path):
        path = tmp_path / "meta.torrent"
        original = {b"info": {b"name": b"file.txt", b"length": 12}}
        with open(path, "wb") as f:
            dump(original, f)
        with open(path, "rb") as f:
            assert load(f) == original

    def test_load_attaches_encoding(self):
        result = load(io.BytesIO(b"l1:\xf1e"), encoding="iso-8859-1")
        assert result[0].to_text() == "ñ"


class TestRoundTrip:
    """Test that encode(decode(x)) == x and decode(encode(x)) == x."""

    def test_string_roundtrip(self):
        original = b"hello world"
        assert decode(encode(original)) == original

    def test_list_roundtrip(self):
        original = [b"test", 123, [b"nested"]]
        assert decode(encode(original)) == original

    def test_dict_roundtrip(self):
        original = {
            b"string": b"value",
            b"integer": 42,
            b"list": [b"item1", b"item2"],
            b"nested": {b"key": b"value"},
        }
        assert decode(encode(original)) == original

    def test_reencode_decoded(self):
        data = b"d4:infod6:lengthi12e4:name8:file.txtee"
        assert encode(decode(data)) == data
