from pkginspect.models.container import EntryRecord, Report

__all__ = ["render_text", "report_to_dict"]


def render_header(report: Report) -> str:
    lines = [
        "== HEADER ==",
        f"Signature: {report.signature_hex}",
        f"Public Key: {report.public_key_hex}",
        f"Header blake3: {report.header_blake3_hex}",
        f"Entry count: {report.count}",
    ]
    return "\n".join(lines) + "\n\n"


def render_entry(entry: EntryRecord) -> str:
    lines = [
        f"== ENTRY {entry.index} ==",
        f"File blake3: {entry.entry_blake3_hex}",
        f"Offset: {entry.offset} bytes, Size: {entry.size} bytes",
        f"Mode: {entry.perm_octal} ({entry.perm_symbolic}), Type: {entry.mode_kind}",
        f"Path: {entry.path}",
    ]
    return "\n".join(lines) + "\n\n"


def render_text(report: Report) -> str:
    return render_header(report) + "".join(map(render_entry, report.entries))


def report_to_dict(report: Report) -> dict:
    return {
        "signature": report.signature_hex,
        "public_key": report.public_key_hex,
        "header_blake3": report.header_blake3_hex,
        "count": report.count,
        "entries": [
            {
                "index": entry.index,
                "entry_blake3": entry.entry_blake3_hex,
                "offset": entry.offset,
                "size": entry.size,
                "mode": entry.mode,
                "kind": str(entry.mode_kind),
                "perm_octal": entry.perm_octal,
                "perm_symbolic": entry.perm_symbolic,
                "path": entry.path,
            }
            for entry in report.entries
        ],
    }
