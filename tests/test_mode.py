import pytest

from pkginspect.models import FileKind, decode_mode


@pytest.mark.parametrize(
    "mode, kind, perm_octal, perm_symbolic",
    [
        (0o100755, FileKind.FILE, "0o0755", "rwxr-xr-x"),
        (0o120644, FileKind.SYMLINK, "0o0644", "rw-r--r--"),
        (0o104755, FileKind.FILE, "0o4755", "rwxr-xr-x"),
        (0o041777, FileKind.OTHER, "0o1777", "rwxrwxrwx"),
        (0o020600, FileKind.OTHER, "0o0600", "rw-------"),
        (0o100000, FileKind.FILE, "0o0000", "---------"),
        (0, FileKind.OTHER, "0o0000", "---------"),
        (0xFFFFFFFF, FileKind.OTHER, "0o7777", "rwxrwxrwx"),
    ],
)
def test_decode_mode(mode, kind, perm_octal, perm_symbolic):
    result = decode_mode(mode)
    assert result.kind == kind
    assert result.perm_octal == perm_octal
    assert result.perm_symbolic == perm_symbolic


def test_upper_bits_are_ignored():
    assert decode_mode(0xABCD0000 | 0o100640) == decode_mode(0o100640)


@pytest.mark.parametrize("mode", [0o000001 << shift for shift in range(12)])
def test_symbolic_form_is_nine_rwx_characters(mode):
    symbolic = decode_mode(mode).perm_symbolic
    assert len(symbolic) == 9
    assert set(symbolic) <= set("rwx-")


@pytest.mark.parametrize(
    "mode, expected",
    [
        (0o400, "r--------"),
        (0o040, "---r-----"),
        (0o004, "------r--"),
        (0o001, "--------x"),
        (0o7000, "---------"),
    ],
)
def test_symbolic_bit_positions(mode, expected):
    assert decode_mode(mode).perm_symbolic == expected


def test_kind_renders_as_label():
    assert str(decode_mode(0o120777).kind) == "Symlink"


@pytest.mark.parametrize("mode", [-1, 2**32])
def test_mode_outside_u32_is_rejected(mode):
    with pytest.raises(ValueError):
        decode_mode(mode)
