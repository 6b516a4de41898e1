"""
State carried between successive encode or decode calls

A Context belongs to exactly one stream. The codec writes into its buffer at
pos, and the caller reads results back from read_pos.
"""

from dataclasses import dataclass
from typing import Optional


DEFAULT_BUFFER_SIZE = 8192

# The bit accumulator behaves like an unsigned 64-bit register
MASK_64BITS = 0xFFFFFFFFFFFFFFFF


@dataclass
class Context:
    """
    Streaming state for one encode or decode session

    A context must not be shared between threads without external locking.
    """
    # Bits folded in from input, awaiting extraction
    bit_work_area: int = 0

    # Output sink, allocated on first write
    buffer: Optional[bytearray] = None

    # Write cursor into buffer
    pos: int = 0

    # Read cursor into buffer
    read_pos: int = 0

    # Set once the end of input has been signalled or a pad byte seen
    eof: bool = False

    # Symbols written since the last line separator (encoding only)
    current_line_pos: int = 0

    # Position within the current group: 0-4 when encoding, 0-7 when decoding
    modulus: int = 0

    def __repr__(self) -> str:
        size = len(self.buffer) if self.buffer is not None else 0
        return (
            f"Context(bit_work_area={self.bit_work_area:#x}, buffer_size={size}, "
            f"pos={self.pos}, read_pos={self.read_pos}, eof={self.eof}, "
            f"current_line_pos={self.current_line_pos}, modulus={self.modulus})"
        )


def has_data(context: Context) -> bool:
    """Return True while a buffer is allocated, even if everything in it was read"""
    return context.buffer is not None


def available(context: Context) -> int:
    """Return the number of unread bytes in the buffer"""
    return context.pos - context.read_pos if context.buffer is not None else 0


def ensure_buffer_size(size: int, context: Context) -> bytearray:
    """
    Make room for size more bytes at the write cursor

    Args:
        size: Minimum free space required after pos
        context: Context owning the buffer

    Returns:
        The (possibly new) buffer
    """
    if context.buffer is None:
        context.buffer = bytearray(max(size, DEFAULT_BUFFER_SIZE))
        context.pos = 0
        context.read_pos = 0
    elif context.pos + size > len(context.buffer):
        new_size = max(len(context.buffer) * 2, context.pos + size)
        context.buffer.extend(bytes(new_size - len(context.buffer)))
    return context.buffer


def read_results(context: Context, size: Optional[int] = None) -> bytes:
    """
    Take unread bytes out of the buffer

    Once everything written so far has been read, the buffer is released.

    Args:
        context: Context owning the buffer
        size: Maximum number of bytes to return, everything if None

    Returns:
        The bytes between read_pos and pos, possibly empty
    """
    if context.buffer is None:
        return b""
    count = available(context)
    if size is not None:
        count = min(count, size)
    result = bytes(context.buffer[context.read_pos:context.read_pos + count])
    context.read_pos += count
    if context.read_pos >= context.pos:
        context.buffer = None
    return result
