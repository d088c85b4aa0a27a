import pytest

from bytebraise.fixups import (
    PythonExpansionError,
    ensure_no_python_expansion,
    fixup_oe_import,
)

OE_IMPORT = "\n".join(
    [
        "def oe_import(d):",
        "    import sys",
        "",
        '    bbpath = d.getVar("BBPATH").split(":")',
        '    sys.path[0:0] = [os.path.join(dir, "lib") for dir in bbpath]',
        "",
        "    def inject(name, value):",
    ]
)

SYS_PATH_INSERT = (
    '    sys.path.insert(0, os.path.join(d.getVar("COREBASE"), "bitbake", "lib"))'
)


def test_fixup_inserts_lines():
    result = fixup_oe_import(OE_IMPORT).split("\n")
    original = OE_IMPORT.split("\n")
    assert result == [
        original[0],
        "    import os",
        original[1],
        original[2],
        original[3],
        original[4],
        SYS_PATH_INSERT,
        "    import bb",
        original[5],
        original[6],
    ]


def test_fixup_keeps_original_lines_in_order():
    result = fixup_oe_import(OE_IMPORT + "\n").split("\n")
    added = {"    import os", SYS_PATH_INSERT, "    import bb"}
    assert [line for line in result if line not in added] == OE_IMPORT.split("\n")


def test_fixup_requires_import_sys():
    with pytest.raises(ValueError):
        fixup_oe_import("def oe_import(d):\n    sys.path[0:0] = bbpath\n")


def test_fixup_requires_path_line():
    with pytest.raises(ValueError):
        fixup_oe_import("def oe_import(d):\n    import sys\n")


def test_no_expansion_passes_through():
    text = "plain ${VAR} value"
    assert ensure_no_python_expansion(text) == text


def test_python_expansion_rejected():
    with pytest.raises(PythonExpansionError, match="Python expression"):
        ensure_no_python_expansion("a ${@d.getVar('X')} b")


def test_unterminated_expansion_passes():
    text = "${@oops"
    assert ensure_no_python_expansion(text) == text