"""
Test cases for the one-shot, incremental and stream entry points
"""

import io
import os
import sys
import random

import pytest

# Add the src directory to path to import the pyzbase32 package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pyzbase32 import (
    CodecError,
    ZBase32,
    ZBase32Decoder,
    ZBase32Encoder,
    decode,
    decode_stream,
    encode,
    encode_stream,
    encode_to_string,
    encoded_length,
)


def random_bytes(rng: random.Random, length: int) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(length))


def test_boundary_scenarios():
    """Empty, one byte, one full group, and one group plus one byte"""
    assert encode(b"") == b""
    assert decode(b"") == b""

    assert encode(b"\xff") == b"9h======"
    assert encode(b"\xff", ZBase32(padding=False)) == b"9h"
    assert decode(b"9h======") == b"\xff"
    assert decode(b"9h") == b"\xff"

    five = b"\x00\x44\x32\x14\xc7"
    assert encode(five) == b"ybndrfg8"
    assert encode(five, ZBase32(padding=False)) == b"ybndrfg8"

    six = five + b"\xff"
    assert encode(six) == b"ybndrfg89h======"
    assert decode(encode(six)) == six


def test_encode_to_string():
    assert encode_to_string(b"\x00\x44\x32\x14\xc7") == "ybndrfg8"
    assert encode_to_string(b"") == ""


def test_decode_accepts_str():
    assert decode("ybndrfg8") == b"\x00\x44\x32\x14\xc7"
    assert decode("9h======") == b"\xff"


def test_round_trip():
    """Random data of random length decodes back to itself"""
    rng = random.Random(42)
    for _ in range(21):
        data = random_bytes(rng, rng.randrange(100))
        assert decode(encode(data)) == data
        assert decode(encode_to_string(data)) == data


def test_padding_optionality():
    rng = random.Random(3)
    for length in range(1, 30):
        data = random_bytes(rng, length)
        encoded = encode(data)
        assert decode(encoded.rstrip(b"=")) == decode(encoded) == data


def test_case_insensitivity():
    rng = random.Random(5)
    for length in range(0, 30):
        data = random_bytes(rng, length)
        encoded = encode(data)
        assert decode(encoded.swapcase()) == decode(encoded.upper()) == data


def test_separator_transparency():
    """Whitespace and separators anywhere in the input do not change the result"""
    rng = random.Random(9)
    for length in range(1, 40):
        data = random_bytes(rng, length)
        encoded = bytearray(encode(data))
        for _ in range(rng.randrange(1, 6)):
            filler = rng.choice([b" ", b"\t", b"\r\n", b"\n", b"-"])
            at = rng.randrange(len(encoded) + 1)
            # Keep fillers ahead of the padding, which ends the stream
            at = min(at, len(encoded.rstrip(b"=")))
            encoded[at:at] = filler
        assert decode(bytes(encoded)) == data


def test_wrapped_output_round_trips():
    rng = random.Random(13)
    codec = ZBase32(16)
    data = random_bytes(rng, 77)
    encoded = encode(data, codec)
    lines = encoded.split(b"\r\n")
    assert lines[-1] == b""
    assert all(len(line) == 16 for line in lines[:-2])
    assert 0 < len(lines[-2]) <= 16
    assert decode(encoded) == data


def test_encoded_length():
    assert encoded_length(b"") == 0
    assert encoded_length(b"\x00") == 8
    assert encoded_length(b"\x00" * 5) == 8
    assert encoded_length(b"\x00" * 6) == 16
    assert encoded_length(b"\x00" * 6, ZBase32(16)) == len(encode(b"\x00" * 6, ZBase32(16)))
    assert encoded_length(b"\x00" * 10, ZBase32(8)) == len(encode(b"\x00" * 10, ZBase32(8)))
    data = bytes(range(200))
    codec = ZBase32(24, b"\n")
    assert encoded_length(data, codec) == len(encode(data, codec))


def test_encoded_length_without_padding():
    assert encoded_length(b"\xff", ZBase32(padding=False)) == len(b"9h")
    wrapped = ZBase32(8, b"\n", padding=False)
    assert encode(b"\x00" * 6, wrapped) == b"yyyyyyyy\nyy\n"
    assert encoded_length(b"\x00" * 6, wrapped) == 12
    rng = random.Random(17)
    for codec in (ZBase32(padding=False), wrapped, ZBase32(24, b"\r\n", padding=False)):
        for length in range(0, 23):
            data = random_bytes(rng, length)
            assert encoded_length(data, codec) == len(encode(data, codec)), f"length {length}"


def test_incremental_encoder():
    encoder = ZBase32Encoder()
    out = encoder.update(b"\x00\x44")
    assert out == b""
    out += encoder.update(b"\x32\x14\xc7\xff")
    assert out == b"ybndrfg8"
    assert not encoder.finished
    out += encoder.finish()
    assert encoder.finished
    assert out == b"ybndrfg89h======"
    assert encoder.update(b"more") == b""
    assert encoder.finish() == b""


def test_incremental_decoder():
    decoder = ZBase32Decoder()
    out = decoder.update(b"ybnd")
    assert out == b""
    out += decoder.update("rfg8 9h")
    assert out == b"\x00\x44\x32\x14\xc7"
    out += decoder.finish()
    assert out == b"\x00\x44\x32\x14\xc7\xff"
    assert decoder.finished
    assert decoder.update(b"ybndrfg8") == b""


def test_incremental_decoder_finished_by_padding():
    decoder = ZBase32Decoder()
    assert decoder.update(b"9h==") == b"\xff"
    assert decoder.finished
    assert decoder.update(b"====") == b""
    assert decoder.finish() == b""


def test_strict_decode():
    codec = ZBase32(strict=True)
    assert decode(b"ybnd rfg8\r\n", codec) == b"\x00\x44\x32\x14\xc7"
    with pytest.raises(CodecError):
        decode(b"ybnd-rfg8", codec)
    # Lenient mode stays the default
    assert decode(b"ybnd-rfg8") == b"\x00\x44\x32\x14\xc7"


def test_stream_round_trip():
    rng = random.Random(21)
    data = random_bytes(rng, 1000)
    codec = ZBase32(64)
    for chunk_size in (1, 7, 64, 5000):
        encoded = io.BytesIO()
        written = encode_stream(io.BytesIO(data), encoded, codec, chunk_size=chunk_size)
        assert written == len(encoded.getvalue())
        assert encoded.getvalue() == encode(data, codec)

        decoded = io.BytesIO()
        written = decode_stream(io.BytesIO(encoded.getvalue()), decoded, codec, chunk_size=chunk_size)
        assert written == len(data)
        assert decoded.getvalue() == data


def test_decode_stream_stops_reading_after_padding():
    source = io.BytesIO(b"9h======" + b"ybndrfg8" * 10)
    out = io.BytesIO()
    decode_stream(source, out, chunk_size=8)
    assert out.getvalue() == b"\xff"
    assert source.tell() == 8


def test_stream_rejects_bad_chunk_size():
    with pytest.raises(ValueError):
        encode_stream(io.BytesIO(b""), io.BytesIO(), chunk_size=0)
    with pytest.raises(ValueError):
        decode_stream(io.BytesIO(b""), io.BytesIO(), chunk_size=-1)
