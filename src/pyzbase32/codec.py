"""
Entry points which drive the streaming codec

The ZBase32 state machines only ever see one slice of input at a time. The
helpers here feed them whole buffers, incremental updates or binary file
objects, and always finish with the end-of-input call so the last partial
group is flushed.
"""

import logging
from typing import BinaryIO, Optional, Union

from .base32 import ZBase32
from .config import BITS_PER_ENCODED_BYTE, BYTES_PER_ENCODED_BLOCK, BYTES_PER_UNENCODED_BLOCK
from .context import Context, read_results


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192

_DEFAULT_CODEC = ZBase32()


def _codec_or_default(codec: Optional[ZBase32]) -> ZBase32:
    return codec if codec is not None else _DEFAULT_CODEC


class ZBase32Encoder:
    """Incremental encoder: feed bytes with update(), end with finish()"""

    def __init__(self, codec: Optional[ZBase32] = None):
        self._codec = _codec_or_default(codec)
        self._context = Context()

    @property
    def finished(self) -> bool:
        return self._context.eof

    def update(self, data: bytes) -> bytes:
        """Encode more data, returning the symbols for every completed group"""
        self._codec.encode(data, 0, len(data), self._context)
        return read_results(self._context)

    def finish(self) -> bytes:
        """Flush the trailing partial group, padding and final line separator"""
        self._codec.encode(b"", 0, -1, self._context)
        return read_results(self._context)


class ZBase32Decoder:
    """Incremental decoder: feed symbols with update(), end with finish()"""

    def __init__(self, codec: Optional[ZBase32] = None):
        self._codec = _codec_or_default(codec)
        self._context = Context()

    @property
    def finished(self) -> bool:
        """True once finish() was called or a pad byte was seen"""
        return self._context.eof

    def update(self, data: Union[bytes, str]) -> bytes:
        """Decode more symbols, returning the bytes for every completed group"""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._codec.decode(data, 0, len(data), self._context)
        return read_results(self._context)

    def finish(self) -> bytes:
        """Flush the bytes held by a trailing partial group"""
        self._codec.decode(b"", 0, -1, self._context)
        return read_results(self._context)


def encode(data: bytes, codec: Optional[ZBase32] = None) -> bytes:
    """
    Encode bytes into z-base32 symbols

    Args:
        data: Bytes to encode
        codec: Codec to use, the default has padding and no line wrapping

    Returns:
        Encoded symbols as ASCII bytes
    """
    if not data:
        return b""
    encoder = ZBase32Encoder(codec)
    return encoder.update(data) + encoder.finish()


def encode_to_string(data: bytes, codec: Optional[ZBase32] = None) -> str:
    """Encode bytes into a z-base32 string"""
    return encode(data, codec).decode("ascii")


def decode(data: Union[bytes, str], codec: Optional[ZBase32] = None) -> bytes:
    """
    Decode z-base32 symbols into bytes

    Letters may be in either case. Padding is optional, and bytes outside the
    alphabet are skipped unless the codec is strict.

    Args:
        data: Encoded symbols, a str is UTF-8 encoded first
        codec: Codec to use

    Returns:
        Decoded bytes

    Raises:
        CodecError: If the codec is strict and data contains a foreign byte
    """
    if not data:
        return b""
    decoder = ZBase32Decoder(codec)
    return decoder.update(data) + decoder.finish()


def encoded_length(data: bytes, codec: Optional[ZBase32] = None) -> int:
    """
    Calculate the length of the encoded form of data, including padding and
    line separators
    """
    codec = _codec_or_default(codec)
    if codec.config.padding:
        length = (len(data) + BYTES_PER_UNENCODED_BLOCK - 1) // BYTES_PER_UNENCODED_BLOCK * BYTES_PER_ENCODED_BLOCK
    else:
        # Only the symbols carrying real bits, rounded up to a whole symbol
        length = (len(data) * 8 + BITS_PER_ENCODED_BYTE - 1) // BITS_PER_ENCODED_BYTE
    # The last line gets a separator even when it is partial
    if codec.line_length > 0:
        length += (length + codec.line_length - 1) // codec.line_length * codec.config.chunk_separator_length
    return length


def encode_stream(
    reader: BinaryIO,
    writer: BinaryIO,
    codec: Optional[ZBase32] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """
    Encode everything read from reader and write the symbols to writer

    Returns:
        Number of bytes written
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    encoder = ZBase32Encoder(codec)
    written = 0
    consumed = 0
    while True:
        chunk = reader.read(chunk_size)
        if not chunk:
            break
        consumed += len(chunk)
        out = encoder.update(chunk)
        writer.write(out)
        written += len(out)
    out = encoder.finish()
    writer.write(out)
    written += len(out)
    logger.debug("Encoded %d bytes into %d", consumed, written)
    return written


def decode_stream(
    reader: BinaryIO,
    writer: BinaryIO,
    codec: Optional[ZBase32] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """
    Decode everything read from reader and write the bytes to writer

    Reading stops early once padding has ended the stream.

    Returns:
        Number of bytes written
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    decoder = ZBase32Decoder(codec)
    written = 0
    consumed = 0
    while not decoder.finished:
        chunk = reader.read(chunk_size)
        if not chunk:
            break
        consumed += len(chunk)
        out = decoder.update(chunk)
        writer.write(out)
        written += len(out)
    out = decoder.finish()
    writer.write(out)
    written += len(out)
    logger.debug("Decoded %d bytes into %d", consumed, written)
    return written
