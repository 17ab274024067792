from dataclasses import dataclass
from enum import StrEnum

__all__ = ["FileKind", "Mode", "decode_mode"]

KIND_MASK = 0o170000
PERM_MASK = 0o007777
S_IFREG = 0o100000
S_IFLNK = 0o120000

SYMBOLS = "rwx"


class FileKind(StrEnum):
    FILE = "File"
    SYMLINK = "Symlink"
    OTHER = "Other"

    @classmethod
    def from_bits(cls, kind_bits: int) -> "FileKind":
        return {S_IFREG: cls.FILE, S_IFLNK: cls.SYMLINK}.get(kind_bits, cls.OTHER)


@dataclass(frozen=True, kw_only=True)
class Mode:
    kind: FileKind
    perm_octal: str
    perm_symbolic: str


def to_symbolic(perm: int) -> str:
    """Render the owner/group/other rwx triplets, ignoring special bits."""
    result = ""
    for shift in (6, 3, 0):
        triplet = (perm >> shift) & 0o7
        for i, symbol in enumerate(SYMBOLS):
            result += symbol if triplet & (0b100 >> i) else "-"
    return result


def decode_mode(mode: int) -> Mode:
    if not 0 <= mode <= 0xFFFFFFFF:
        raise ValueError(f"Mode out of u32 range: {mode}")
    perm_bits = mode & PERM_MASK
    return Mode(
        kind=FileKind.from_bits(mode & KIND_MASK),
        perm_octal=f"0o{perm_bits:04o}",
        perm_symbolic=to_symbolic(perm_bits),
    )
