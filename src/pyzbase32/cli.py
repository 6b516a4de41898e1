"""Command-line interface for pyzbase32."""

import codecs
import logging
from typing import BinaryIO, Optional

import click

from .base32 import CodecError, ZBase32
from .codec import DEFAULT_CHUNK_SIZE, decode_stream, encode_stream
from .config import PAD_DEFAULT, ConfigurationError
from .logutil import configure_logging


logger = logging.getLogger(__name__)


def _unescape(text: str) -> bytes:
    """Turn a command-line string such as '\\r\\n' into raw bytes"""
    try:
        return codecs.decode(text.encode("ascii"), "unicode_escape").encode("latin-1")
    except UnicodeError as exc:
        raise click.BadParameter(
            f"cannot be turned into bytes: {text!r}", param_hint="'--separator'"
        ) from exc


def _build_codec(**kwargs) -> ZBase32:
    try:
        return ZBase32(**kwargs)
    except ConfigurationError as exc:
        raise click.UsageError(str(exc)) from exc


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"], case_sensitive=False),
    default=None,
    help="Set the log level for the CLI session.",
)
def main(log_level: Optional[str]) -> None:
    """Encode and decode z-base32."""
    configure_logging(log_level)


@main.command()
@click.argument("input_file", metavar="INPUT", type=click.File("rb"), default="-")
@click.option("-o", "--output", type=click.File("wb"), default="-", help="Write to this file instead of stdout.")
@click.option("--line-length", type=int, default=0, show_default=True,
              help="Wrap output every N symbols (rounded down to a multiple of 8), 0 to disable.")
@click.option("--separator", default="\\r\\n", show_default=True,
              help="Line separator, escape sequences are honoured.")
@click.option("--pad", default=PAD_DEFAULT.decode("ascii"), show_default=True, help="Pad character.")
@click.option("--no-padding", is_flag=True, help="Do not pad the final group.")
@click.option("--chunk-size", type=click.IntRange(min=1), default=DEFAULT_CHUNK_SIZE, show_default=True)
def encode(
    input_file: BinaryIO,
    output: BinaryIO,
    line_length: int,
    separator: str,
    pad: str,
    no_padding: bool,
    chunk_size: int,
) -> None:
    """Encode INPUT (default stdin) as z-base32."""
    codec = _build_codec(
        line_length=line_length,
        line_separator=_unescape(separator),
        pad=pad.encode("utf-8"),
        padding=not no_padding,
    )
    written = encode_stream(input_file, output, codec, chunk_size=chunk_size)
    logger.info("Wrote %d encoded bytes", written)


@main.command()
@click.argument("input_file", metavar="INPUT", type=click.File("rb"), default="-")
@click.option("-o", "--output", type=click.File("wb"), default="-", help="Write to this file instead of stdout.")
@click.option("--pad", default=PAD_DEFAULT.decode("ascii"), show_default=True, help="Pad character.")
@click.option("--strict", is_flag=True, help="Fail on bytes that are neither symbols nor whitespace.")
@click.option("--chunk-size", type=click.IntRange(min=1), default=DEFAULT_CHUNK_SIZE, show_default=True)
def decode(
    input_file: BinaryIO,
    output: BinaryIO,
    pad: str,
    strict: bool,
    chunk_size: int,
) -> None:
    """Decode z-base32 from INPUT (default stdin)."""
    codec = _build_codec(pad=pad.encode("utf-8"), strict=strict)
    try:
        written = decode_stream(input_file, output, codec, chunk_size=chunk_size)
    except CodecError as exc:
        raise click.ClickException(str(exc)) from exc
    logger.info("Wrote %d decoded bytes", written)
