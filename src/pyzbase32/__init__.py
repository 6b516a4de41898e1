"""
pyzbase32

A streaming codec for z-base32, the human-oriented Base32 variant whose alphabet
avoids visually confusable characters.

Encoding and decoding work on input of any size, delivered in slices of any
size: the state of a partially processed group is carried between calls in a
Context. The one-shot helpers encode() and decode() and the incremental
ZBase32Encoder / ZBase32Decoder cover the common cases.

For the z-base32 design, see:
https://philzimmermann.com/docs/human-oriented-base-32-encoding.txt
"""

from .alphabet import (
    ZBASE32_ALPHABET,
    ZBASE32_INV_ALPHABET,
    is_in_alphabet,
    is_in_alphabet_bytes,
    is_whitespace,
)

from .config import (
    CodecConfig,
    ConfigurationError,
    CHUNK_SEPARATOR,
    PAD_DEFAULT,
    MIME_CHUNK_SIZE,
    PEM_CHUNK_SIZE,
)

from .context import (
    Context,
    available,
    has_data,
    ensure_buffer_size,
    read_results,
)

from .base32 import (
    CodecError,
    ZBase32,
)

from .codec import (
    ZBase32Encoder,
    ZBase32Decoder,
    encode,
    encode_to_string,
    decode,
    encoded_length,
    encode_stream,
    decode_stream,
)

__version__ = "0.1.0"

__all__ = [
    # Alphabet
    "ZBASE32_ALPHABET",
    "ZBASE32_INV_ALPHABET",
    "is_in_alphabet",
    "is_in_alphabet_bytes",
    "is_whitespace",

    # Configuration
    "CodecConfig",
    "ConfigurationError",
    "CHUNK_SEPARATOR",
    "PAD_DEFAULT",
    "MIME_CHUNK_SIZE",
    "PEM_CHUNK_SIZE",

    # Streaming state
    "Context",
    "available",
    "has_data",
    "ensure_buffer_size",
    "read_results",

    # Codec
    "CodecError",
    "ZBase32",

    # Entry points
    "ZBase32Encoder",
    "ZBase32Decoder",
    "encode",
    "encode_to_string",
    "decode",
    "encoded_length",
    "encode_stream",
    "decode_stream",
]
