import logging
import struct
from dataclasses import dataclass

from pkginspect.models.mode import FileKind, decode_mode
from pkginspect.utils import to_hex

__all__ = [
    "CountOverflow",
    "DecodeError",
    "EntryRecord",
    "Header",
    "InvalidPath",
    "Report",
    "TruncatedEntryTable",
    "TruncatedHeader",
    "decode",
    "encode",
]

logger = logging.getLogger(__name__)

SIGNATURE_SIZE = 64
PUBLIC_KEY_SIZE = 32
BLAKE3_SIZE = 32
PATH_SIZE = 256

HEADER_SIZE = 136
ENTRY_SIZE = 308
U64_MAX = 2**64 - 1

NULL_BYTE = b"\x00"

# signature, public key, header blake3, count
HEADER_STRUCT = struct.Struct("<64s32s32sQ")
# entry blake3, offset, size, mode, path
ENTRY_STRUCT = struct.Struct("<32sQQI256s")


class DecodeError(ValueError):
    pass


class TruncatedHeader(DecodeError):
    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"Truncated header: need {HEADER_SIZE} bytes, got {length}"
        )


class TruncatedEntryTable(DecodeError):
    def __init__(self, length: int, required: int):
        self.length = length
        self.required = required
        super().__init__(
            f"Truncated entry table: need {required} bytes, got {length}"
        )


class CountOverflow(DecodeError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Entry count {count} overflows the 64-bit table size")


class InvalidPath(DecodeError):
    def __init__(self, entry_index: int):
        self.entry_index = entry_index
        super().__init__(f"Entry {entry_index} has a path that is not valid UTF-8")


@dataclass(frozen=True, kw_only=True)
class Header:
    signature: bytes
    public_key: bytes
    header_blake3: bytes
    count: int

    @classmethod
    def from_bytes(cls, data: bytes):
        if len(data) < HEADER_SIZE:
            raise TruncatedHeader(len(data))
        signature, public_key, header_blake3, count = HEADER_STRUCT.unpack_from(data)
        return cls(
            signature=signature,
            public_key=public_key,
            header_blake3=header_blake3,
            count=count,
        )

    @property
    def table_end(self) -> int:
        """Absolute offset just past the last entry."""
        end = HEADER_SIZE + self.count * ENTRY_SIZE
        if end > U64_MAX:
            raise CountOverflow(self.count)
        return end


@dataclass(frozen=True, kw_only=True)
class EntryRecord:
    index: int
    entry_blake3: bytes
    offset: int
    size: int
    mode: int
    mode_kind: FileKind
    perm_octal: str
    perm_symbolic: str
    path: str

    @property
    def entry_blake3_hex(self) -> str:
        return to_hex(self.entry_blake3)

    @classmethod
    def from_bytes(cls, data: bytes, position: int):
        """Decode the entry at table position ``position`` (0-based)."""
        base = HEADER_SIZE + position * ENTRY_SIZE
        entry_blake3, offset, size, mode, raw_path = ENTRY_STRUCT.unpack_from(
            data, base
        )
        # Anything after the first NUL is padding
        path_bytes, _, _ = raw_path.partition(NULL_BYTE)
        try:
            path = path_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidPath(position) from e
        parsed_mode = decode_mode(mode)
        return cls(
            index=position + 1,
            entry_blake3=entry_blake3,
            offset=offset,
            size=size,
            mode=mode,
            mode_kind=parsed_mode.kind,
            perm_octal=parsed_mode.perm_octal,
            perm_symbolic=parsed_mode.perm_symbolic,
            path=path,
        )

    def to_bytes(self) -> bytes:
        if len(self.entry_blake3) != BLAKE3_SIZE:
            raise ValueError(f"Entry blake3 must be {BLAKE3_SIZE} bytes")
        path = self.path.encode()
        if NULL_BYTE in path:
            raise ValueError(f"Path contains a NUL byte: {self.path!r}")
        if len(path) > PATH_SIZE:
            raise ValueError(f"Path longer than {PATH_SIZE} bytes: {self.path!r}")
        try:
            return ENTRY_STRUCT.pack(
                self.entry_blake3, self.offset, self.size, self.mode, path
            )
        except struct.error as e:
            raise ValueError(f"Entry {self.index} does not fit the layout: {e}") from e


@dataclass(frozen=True, kw_only=True)
class Report:
    signature: bytes
    public_key: bytes
    header_blake3: bytes
    count: int
    entries: tuple[EntryRecord, ...]

    @property
    def signature_hex(self) -> str:
        return to_hex(self.signature)

    @property
    def public_key_hex(self) -> str:
        return to_hex(self.public_key)

    @property
    def header_blake3_hex(self) -> str:
        return to_hex(self.header_blake3)


def decode(buffer: bytes | bytearray | memoryview) -> Report:
    # Work on a private copy so the report never aliases caller memory
    data = bytes(buffer)
    header = Header.from_bytes(data)
    logger.debug("Container declares %d entries", header.count)

    required = header.table_end
    if len(data) < required:
        raise TruncatedEntryTable(len(data), required)

    entries = []
    for position in range(header.count):
        entry = EntryRecord.from_bytes(data, position)
        logger.debug("Entry %d: %s (%d bytes)", entry.index, entry.path, entry.size)
        entries.append(entry)

    return Report(
        signature=header.signature,
        public_key=header.public_key,
        header_blake3=header.header_blake3,
        count=header.count,
        entries=tuple(entries),
    )


def encode(report: Report) -> bytes:
    """Build a container buffer that decodes back to ``report``."""
    for name, value, size in [
        ("signature", report.signature, SIGNATURE_SIZE),
        ("public key", report.public_key, PUBLIC_KEY_SIZE),
        ("header blake3", report.header_blake3, BLAKE3_SIZE),
    ]:
        if len(value) != size:
            raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    header = HEADER_STRUCT.pack(
        report.signature,
        report.public_key,
        report.header_blake3,
        len(report.entries),
    )
    return header + b"".join(entry.to_bytes() for entry in report.entries)
