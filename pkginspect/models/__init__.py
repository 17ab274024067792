from pkginspect.models.container import (
    CountOverflow,
    DecodeError,
    EntryRecord,
    Header,
    InvalidPath,
    Report,
    TruncatedEntryTable,
    TruncatedHeader,
    decode,
    encode,
)
from pkginspect.models.fetch import (
    ContainerFetcher,
    FetchError,
    IncompleteTransfer,
    Progress,
    UnknownLength,
    fetch_bytes,
)
from pkginspect.models.mode import FileKind, Mode, decode_mode
from pkginspect.models.render import render_text, report_to_dict

__all__ = [
    "ContainerFetcher",
    "CountOverflow",
    "DecodeError",
    "EntryRecord",
    "FetchError",
    "FileKind",
    "Header",
    "IncompleteTransfer",
    "InvalidPath",
    "Mode",
    "Progress",
    "Report",
    "TruncatedEntryTable",
    "TruncatedHeader",
    "UnknownLength",
    "decode",
    "decode_mode",
    "encode",
    "fetch_bytes",
    "render_text",
    "report_to_dict",
]
