"""
Codec configuration

A CodecConfig is built once, validated on construction and never changes, so a
single instance can be shared by any number of streams.
"""

from dataclasses import dataclass
from typing import Optional

from .alphabet import contains_alphabet_or_pad, is_in_alphabet, is_whitespace


# Five bytes form a 40-bit group which is written as eight 5-bit symbols
BITS_PER_ENCODED_BYTE = 5
BYTES_PER_UNENCODED_BLOCK = 5
BYTES_PER_ENCODED_BLOCK = 8

PAD_DEFAULT = b"="

# Chunk separator per RFC 2045 section 2.1
CHUNK_SEPARATOR = b"\r\n"

# Line lengths used by MIME (RFC 2045) and PEM (RFC 1421)
MIME_CHUNK_SIZE = 76
PEM_CHUNK_SIZE = 64


class ConfigurationError(ValueError):
    """The codec was constructed with an unusable pad byte or line separator"""
    pass


@dataclass(frozen=True)
class CodecConfig:
    """
    Immutable settings for a z-base32 codec

    line_length is stored rounded down to a multiple of eight symbols; anything
    that rounds to zero disables line wrapping. line_separator is only kept when
    wrapping is active.
    """
    line_length: int = 0
    line_separator: Optional[bytes] = CHUNK_SEPARATOR
    pad: bytes = PAD_DEFAULT
    # Write pad symbols after a partial final group
    padding: bool = True
    # Reject foreign bytes while decoding instead of skipping them
    strict: bool = False

    def __post_init__(self):
        if not isinstance(self.pad, (bytes, bytearray)) or len(self.pad) != 1:
            raise ConfigurationError(f"pad must be a single byte, got {self.pad!r}")
        pad = self.pad[0]
        if is_in_alphabet(pad) or is_whitespace(pad):
            raise ConfigurationError("pad must not be in alphabet or whitespace")

        line_length = self.line_length
        line_separator = self.line_separator
        if line_length > 0:
            if line_separator is None:
                raise ConfigurationError(
                    f"lineLength {line_length} > 0, but lineSeparator is None"
                )
            if contains_alphabet_or_pad(line_separator, pad):
                sep = bytes(line_separator).decode("utf-8", errors="replace")
                raise ConfigurationError(
                    f"lineSeparator must not contain z-base32 characters: [{sep}]"
                )
            line_length = (line_length // BYTES_PER_ENCODED_BLOCK) * BYTES_PER_ENCODED_BLOCK
        else:
            line_length = 0

        if line_length == 0 or not line_separator:
            line_length = 0
            line_separator = None

        object.__setattr__(self, "pad", bytes(self.pad))
        object.__setattr__(self, "line_length", line_length)
        object.__setattr__(
            self, "line_separator", bytes(line_separator) if line_separator is not None else None
        )

    @property
    def pad_byte(self) -> int:
        """The pad character as an integer"""
        return self.pad[0]

    @property
    def chunk_separator_length(self) -> int:
        return len(self.line_separator) if self.line_separator else 0

    @property
    def encode_size(self) -> int:
        """Worst-case output of one encode step: a full group plus a separator"""
        return BYTES_PER_ENCODED_BLOCK + self.chunk_separator_length

    @property
    def decode_size(self) -> int:
        return self.encode_size - 1
