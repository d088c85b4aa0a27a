"""Path lookup, value membership and environment filtering helpers."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

PRESERVED_ENVVARS_EXPORTED = (
    "BB_TASKHASH",
    "HOME",
    "LOGNAME",
    "PATH",
    "PWD",
    "SHELL",
    "USER",
    "LC_ALL",
    "BBSERVER",
)

PRESERVED_ENVVARS = PRESERVED_ENVVARS_EXPORTED + (
    "BBPATH",
    "BB_PRESERVE_ENV",
    "BB_ENV_WHITELIST",
    "BB_ENV_EXTRAWHITE",
)


def which(
    path: str,
    item: Union[str, os.PathLike],
    reversed: bool = False,
    executable: bool = False,
) -> Optional[Path]:
    """Find ``item`` in the colon-separated ``path``.

    Returns the canonical path of the first match, or ``None``. With
    ``executable`` set, files without any execute bit are skipped.
    """
    directories = path.split(":")
    if reversed:
        directories = directories[::-1]
    for directory in directories:
        candidate = Path(directory) / item
        if not candidate.exists():
            continue
        if executable and candidate.stat().st_mode & 0o111 == 0:
            continue
        return candidate.resolve()
    return None


def contains(
    variable: str,
    check_values: str,
    true_value: str,
    false_value: str,
    d: Mapping[str, object],
) -> str:
    """``true_value`` if every word of ``check_values`` is in the variable.

    ``d`` maps variable names to values. A missing variable gives
    ``false_value``.
    """
    value = d.get(variable)
    if value is None:
        return false_value
    if not isinstance(value, str):
        raise TypeError(f"variable {variable} does not hold a string")
    present = set(value.split())
    wanted = set(check_values.split())
    return true_value if wanted <= present else false_value


def approved_variables(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Names of environment variables allowed through, sorted."""
    if environ is None:
        environ = os.environ

    if "BB_PRESERVE_ENV" in environ:
        return sorted(environ)

    allowlist = environ.get("BB_ENV_WHITELIST")
    if allowlist is not None:
        approved = set(allowlist.split())
        approved.add("BB_ENV_WHITELIST")
    else:
        approved = set(PRESERVED_ENVVARS)

    extra = environ.get("BB_ENV_EXTRAWHITE")
    if extra is not None:
        approved.update(extra.split())
        approved.add("BB_ENV_EXTRAWHITE")

    return sorted(approved)