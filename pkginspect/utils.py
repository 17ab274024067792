import binascii
import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError

__all__ = ["get_parser", "mode_value", "setup_logging", "to_hex"]


def to_hex(data: bytes) -> str:
    return binascii.hexlify(data).decode()


def mode_value(text: str) -> int:
    """Parse a mode given as decimal, ``0o`` octal or ``0x`` hex."""
    try:
        value = int(text, 0)
    except ValueError:
        raise ArgumentTypeError(f"invalid mode value: {text!r}") from None
    if not 0 <= value <= 0xFFFFFFFF:
        raise ArgumentTypeError(f"mode out of 32-bit range: {text!r}")
    return value


def get_parser():
    parser = ArgumentParser(prog="pkginspect")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="more logging"
    )
    subparsers = parser.add_subparsers(dest="command")

    # dump
    dump_parser = subparsers.add_parser("dump")
    dump_parser.add_argument("source", help="container path or http(s) URL")
    dump_parser.add_argument("--json", action="store_true")
    dump_parser.add_argument(
        "-q", "--no-progress", action="store_true", help="hide download progress"
    )

    # mode
    mode_parser = subparsers.add_parser("mode")
    mode_parser.add_argument("value", type=mode_value)

    return parser


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger = logging.getLogger("pkginspect")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)
