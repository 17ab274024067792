import pytest

from pkginspect.models import EntryRecord, Report, decode_mode


def make_entry(index, path, *, mode=0o100644, offset=0, size=0, fill=0xAA):
    parsed = decode_mode(mode)
    return EntryRecord(
        index=index,
        entry_blake3=bytes([fill]) * 32,
        offset=offset,
        size=size,
        mode=mode,
        mode_kind=parsed.kind,
        perm_octal=parsed.perm_octal,
        perm_symbolic=parsed.perm_symbolic,
        path=path,
    )


def make_report(entries=()):
    entries = tuple(entries)
    return Report(
        signature=bytes(range(64)),
        public_key=b"\x01" * 32,
        header_blake3=b"\xfe" * 32,
        count=len(entries),
        entries=entries,
    )


@pytest.fixture
def sample_report():
    return make_report(
        [
            make_entry(1, "bin/tool", mode=0o100755, offset=752, size=1024),
            make_entry(2, "lib/libtool.so", mode=0o120777, offset=1776, size=0, fill=0x0F),
            make_entry(3, "share/doc/README", offset=1776, size=42, fill=0x10),
        ]
    )
