"""
Streaming z-base32 encoding and decoding

Five bytes form a 40-bit group which is written as eight 5-bit symbols. Input may
arrive in slices of any size: the bits of an incomplete group are kept in a
Context until the next call, and a final call with a negative length flushes
whatever is left.
"""

import logging
from enum import Enum
from typing import Optional

from .alphabet import (
    INVALID,
    ZBASE32_ALPHABET,
    ZBASE32_INV_ALPHABET,
    contains_alphabet_or_pad,
    is_in_alphabet,
    is_whitespace,
)
from .config import (
    BITS_PER_ENCODED_BYTE,
    BYTES_PER_ENCODED_BLOCK,
    BYTES_PER_UNENCODED_BLOCK,
    CHUNK_SEPARATOR,
    PAD_DEFAULT,
    CodecConfig,
)
from .context import MASK_64BITS, Context, ensure_buffer_size


logger = logging.getLogger(__name__)

# Mask used to extract 5 bits, used when encoding
MASK_5BITS = 0x1F

# Mask used to extract 8 bits, used when decoding
MASK_8BITS = 0xFF

# Trailing bytes of an incomplete group -> (symbols of real data, pad symbols)
ENCODE_TAIL = {
    1: (2, 6),
    2: (4, 4),
    3: (5, 3),
    4: (7, 1),
}

# Trailing symbols of an incomplete group -> (low bits dropped, bytes emitted)
DECODE_TAIL = {
    2: (2, 1),
    3: (7, 1),
    4: (4, 2),
    5: (1, 3),
    6: (6, 3),
    7: (3, 4),
}


class CodecError(Exception):
    """An error raised while encoding or decoding"""

    class ErrorType(Enum):
        """Types of codec errors"""
        INVALID_SYMBOL = "invalid_symbol"
        IMPOSSIBLE_STATE = "impossible_state"

    def __init__(self, error_type: ErrorType, message: str = ""):
        self.error_type = error_type
        super().__init__(f"{error_type.value}: {message}" if message else error_type.value)


class ZBase32:
    """
    z-base32 codec

    The codec itself holds only immutable configuration and can be shared
    freely. All per-stream state lives in the Context passed to encode() and
    decode().
    """

    def __init__(
        self,
        line_length: int = 0,
        line_separator: Optional[bytes] = CHUNK_SEPARATOR,
        pad: bytes = PAD_DEFAULT,
        *,
        padding: bool = True,
        strict: bool = False,
        config: Optional[CodecConfig] = None,
    ):
        """
        Args:
            line_length: Each line of encoded data will be at most this long,
                rounded down to a multiple of 8. Zero or less disables line
                wrapping. Ignored when decoding.
            line_separator: Bytes written after each line. Must not contain
                z-base32 symbols or the pad byte.
            pad: Single byte used for padding
            padding: Write pad symbols after a partial final group
            strict: Raise on foreign bytes while decoding
            config: A ready-made configuration, overriding all other arguments

        Raises:
            ConfigurationError: If the pad byte or line separator is unusable
        """
        if config is None:
            config = CodecConfig(
                line_length=line_length,
                line_separator=line_separator,
                pad=pad,
                padding=padding,
                strict=strict,
            )
        self._config = config
        self._line_length = config.line_length
        self._line_separator = config.line_separator
        self._pad = config.pad_byte
        self._encode_size = config.encode_size
        self._decode_size = config.decode_size
        logger.debug("Created z-base32 codec: %r", config)

    @property
    def config(self) -> CodecConfig:
        return self._config

    @property
    def line_length(self) -> int:
        return self._line_length

    @property
    def pad(self) -> int:
        return self._pad

    def is_in_alphabet(self, octet: int) -> bool:
        """Return True if the byte is a z-base32 symbol"""
        return is_in_alphabet(octet)

    def contains_alphabet_or_pad(self, data: bytes) -> bool:
        """Return True if any byte of data is a z-base32 symbol or this codec's pad byte"""
        return contains_alphabet_or_pad(data, self._pad)

    def encode(self, data: bytes, in_pos: int, in_avail: int, context: Context) -> None:
        """
        Encode in_avail bytes of data, starting at in_pos

        Must be called at least twice: once with the data to encode, and once
        with in_avail set to -1 to flush the last remaining bytes (if the total
        was not a multiple of 5).

        Args:
            data: Raw bytes to encode
            in_pos: Position to start reading from
            in_avail: Number of bytes to read, negative to signal end of input
            context: Stream state, output is written to context.buffer at context.pos

        Raises:
            CodecError: If the context holds an impossible group position
        """
        if context.eof:
            return

        if in_avail < 0:
            context.eof = True
            self._encode_final(context)
            logger.debug("Encoder reached end of input at pos %d", context.pos)
            return

        for _ in range(in_avail):
            buffer = ensure_buffer_size(self._encode_size, context)
            context.modulus = (context.modulus + 1) % BYTES_PER_UNENCODED_BLOCK
            context.bit_work_area = ((context.bit_work_area << 8) + (data[in_pos] & MASK_8BITS)) & MASK_64BITS
            in_pos += 1
            if context.modulus == 0:
                # 40 bits available, write 8 symbols
                work = context.bit_work_area
                pos = context.pos
                buffer[pos] = ZBASE32_ALPHABET[(work >> 35) & MASK_5BITS]
                buffer[pos + 1] = ZBASE32_ALPHABET[(work >> 30) & MASK_5BITS]
                buffer[pos + 2] = ZBASE32_ALPHABET[(work >> 25) & MASK_5BITS]
                buffer[pos + 3] = ZBASE32_ALPHABET[(work >> 20) & MASK_5BITS]
                buffer[pos + 4] = ZBASE32_ALPHABET[(work >> 15) & MASK_5BITS]
                buffer[pos + 5] = ZBASE32_ALPHABET[(work >> 10) & MASK_5BITS]
                buffer[pos + 6] = ZBASE32_ALPHABET[(work >> 5) & MASK_5BITS]
                buffer[pos + 7] = ZBASE32_ALPHABET[work & MASK_5BITS]
                context.pos = pos + BYTES_PER_ENCODED_BLOCK
                context.current_line_pos += BYTES_PER_ENCODED_BLOCK
                if 0 < self._line_length <= context.current_line_pos:
                    self._write_separator(buffer, context)
                    context.current_line_pos = 0

    def _encode_final(self, context: Context) -> None:
        """Write the partial trailing group, padding and final line separator"""
        modulus = context.modulus
        if modulus == 0 and self._line_length == 0:
            # No leftovers and no line wrapping
            return
        if modulus != 0 and modulus not in ENCODE_TAIL:
            raise CodecError(
                CodecError.ErrorType.IMPOSSIBLE_STATE, f"Impossible modulus {modulus}"
            )

        buffer = ensure_buffer_size(self._encode_size, context)
        saved_pos = context.pos
        if modulus != 0:
            symbols, pad_symbols = ENCODE_TAIL[modulus]
            bits = modulus * 8
            work = context.bit_work_area
            for i in range(symbols):
                # The last symbol takes the remaining bits, zero-filled on the right
                shift = bits - (i + 1) * BITS_PER_ENCODED_BYTE
                value = work >> shift if shift >= 0 else work << -shift
                buffer[context.pos] = ZBASE32_ALPHABET[value & MASK_5BITS]
                context.pos += 1
            if self._config.padding:
                for _ in range(pad_symbols):
                    buffer[context.pos] = self._pad
                    context.pos += 1

        context.current_line_pos += context.pos - saved_pos
        # current_line_pos == 0 means we are at the start of a line
        if self._line_length > 0 and context.current_line_pos > 0:
            self._write_separator(buffer, context)

    def _write_separator(self, buffer: bytearray, context: Context) -> None:
        end = context.pos + len(self._line_separator)
        buffer[context.pos:end] = self._line_separator
        context.pos = end

    def decode(self, data: bytes, in_pos: int, in_avail: int, context: Context) -> None:
        """
        Decode in_avail bytes of data, starting at in_pos

        Should be called at least twice: once with the data to decode, and once
        with in_avail set to -1 to signal end of input. The -1 call is not needed
        if the data ended with padding, but it doesn't hurt either.

        Bytes outside the alphabet are silently skipped unless the codec is
        strict. This is how line separators and whitespace pass through, but it
        also means garbage in, garbage out.

        Args:
            data: z-base32 symbols to decode
            in_pos: Position to start reading from
            in_avail: Number of bytes to read, negative to signal end of input
            context: Stream state, output is written to context.buffer at context.pos

        Raises:
            CodecError: In strict mode if a foreign byte is found, or if the
                context holds an impossible group position
        """
        if context.eof:
            return
        if in_avail < 0:
            context.eof = True

        for _ in range(in_avail):
            octet = data[in_pos] & MASK_8BITS
            in_pos += 1
            if octet == self._pad:
                # Padding ends the stream
                context.eof = True
                break
            buffer = ensure_buffer_size(self._decode_size, context)
            result = ZBASE32_INV_ALPHABET[octet] if octet < len(ZBASE32_INV_ALPHABET) else INVALID
            if result == INVALID:
                if self._config.strict and not self._is_ignorable(octet):
                    raise CodecError(
                        CodecError.ErrorType.INVALID_SYMBOL,
                        f"Invalid z-base32 byte 0x{octet:02x} at offset {in_pos - 1}",
                    )
                continue
            context.modulus = (context.modulus + 1) % BYTES_PER_ENCODED_BLOCK
            context.bit_work_area = ((context.bit_work_area << BITS_PER_ENCODED_BYTE) + result) & MASK_64BITS
            if context.modulus == 0:
                # 40 bits available, write 5 bytes
                work = context.bit_work_area
                pos = context.pos
                buffer[pos] = (work >> 32) & MASK_8BITS
                buffer[pos + 1] = (work >> 24) & MASK_8BITS
                buffer[pos + 2] = (work >> 16) & MASK_8BITS
                buffer[pos + 3] = (work >> 8) & MASK_8BITS
                buffer[pos + 4] = work & MASK_8BITS
                context.pos = pos + BYTES_PER_UNENCODED_BLOCK

        # End of input and the first pad byte both end the stream, which makes
        # the padding itself optional. Fewer than 2 symbols hold no whole byte.
        if context.eof and context.modulus not in (0, 1):
            self._decode_final(context)
            logger.debug("Decoder reached end of input at pos %d", context.pos)

    def _decode_final(self, context: Context) -> None:
        """Write the whole bytes held by a partial trailing group"""
        modulus = context.modulus
        if modulus not in DECODE_TAIL:
            raise CodecError(
                CodecError.ErrorType.IMPOSSIBLE_STATE, f"Impossible modulus {modulus}"
            )
        buffer = ensure_buffer_size(self._decode_size, context)
        dropped, count = DECODE_TAIL[modulus]
        work = context.bit_work_area >> dropped
        for i in reversed(range(count)):
            buffer[context.pos] = (work >> (i * 8)) & MASK_8BITS
            context.pos += 1

    def _is_ignorable(self, octet: int) -> bool:
        if is_whitespace(octet):
            return True
        return self._line_separator is not None and octet in self._line_separator

    def __repr__(self) -> str:
        return f"ZBase32({self._config!r})"
