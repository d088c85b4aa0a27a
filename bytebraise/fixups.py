"""Adjustments to metadata Python code and checks on Python expansions."""

import re

PYTHON_EXPANSION_REGEX = re.compile(r"\$\{@.+?\}")


class PythonExpansionError(Exception):
    """Raised when a value needs a Python expression evaluated."""


def _lines(code: str) -> list[str]:
    lines = code.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def fixup_oe_import(code: str) -> str:
    """Make the ``oe_import`` function find ``bb`` and ``os`` when run.

    Raises :class:`ValueError` if the code lacks the expected lines.
    """
    lines = _lines(code)
    trimmed = [line.strip() for line in lines]

    try:
        sys_line = trimmed.index("import sys")
    except ValueError:
        raise ValueError("oe_import has no 'import sys' line") from None

    path_line = next(
        (
            number
            for number, line in enumerate(trimmed)
            if line.startswith("sys.path[0:0]") and "bbpath" in line
        ),
        None,
    )
    if path_line is None:
        raise ValueError("oe_import does not extend sys.path from bbpath")

    lines.insert(sys_line, "    import os")
    at = path_line + 2
    lines[at:at] = [
        '    sys.path.insert(0, os.path.join(d.getVar("COREBASE"), "bitbake", "lib"))',
        "    import bb",
    ]
    return "\n".join(lines)


def ensure_no_python_expansion(text: str) -> str:
    """Return ``text`` unchanged unless it holds a ``${@...}`` expression."""
    if PYTHON_EXPANSION_REGEX.search(text):
        raise PythonExpansionError(
            "built without Python support, but attempted to expand "
            f"Python expression: {text}"
        )
    return text