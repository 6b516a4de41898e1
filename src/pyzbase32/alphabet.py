"""
The z-base32 alphabet

z-base32 reorders the 32 Base32 symbols so that the characters which are easiest
to read, write and speak come first. See
https://philzimmermann.com/docs/human-oriented-base-32-encoding.txt
"""

from typing import List


# z-base32 encoding table, index = 5-bit value
ZBASE32_ALPHABET = b"ybndrfg8ejkmcpqxot1uwisza345h769"

# Marks a byte with no meaning in the decoding table
INVALID = -1

WHITESPACE = b" \t\r\n"


def _build_decode_table(alphabet: bytes) -> List[int]:
    """
    Build the inverse of an encoding table over the byte range 0-127

    Letters are entered in both cases so decoding is case-insensitive.
    """
    table = [INVALID] * 128
    for value, symbol in enumerate(alphabet):
        table[ord(chr(symbol).lower())] = value
        table[ord(chr(symbol).upper())] = value
    return table


# z-base32 decoding table
# Maps from ASCII value to decoded value, -1 for invalid
ZBASE32_INV_ALPHABET = _build_decode_table(ZBASE32_ALPHABET)


def is_in_alphabet(octet: int) -> bool:
    """Return True if the byte is a z-base32 symbol (either case)"""
    return 0 <= octet < len(ZBASE32_INV_ALPHABET) and ZBASE32_INV_ALPHABET[octet] != INVALID


def is_whitespace(octet: int) -> bool:
    """Return True for space, tab, CR and LF"""
    return octet in WHITESPACE


def contains_alphabet_or_pad(data: bytes, pad: int) -> bool:
    """Return True if any byte of data is a z-base32 symbol or the pad byte"""
    for octet in data:
        if octet == pad or is_in_alphabet(octet):
            return True
    return False


def is_in_alphabet_bytes(data: bytes, allow_ws_pad: bool, pad: int) -> bool:
    """
    Check that every byte of data is a z-base32 symbol

    Args:
        data: Bytes to test
        allow_ws_pad: Also accept whitespace and the pad byte
        pad: The pad byte in use

    Returns:
        True if every byte is acceptable, True for empty data
    """
    for octet in data:
        if is_in_alphabet(octet):
            continue
        if allow_ws_pad and (octet == pad or is_whitespace(octet)):
            continue
        return False
    return True
