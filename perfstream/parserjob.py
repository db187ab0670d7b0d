"""Preparation of a parser run and interpretation of how it ended."""

from __future__ import annotations

import os
from enum import IntEnum
from pathlib import Path
from typing import Optional, Union

MAX_FRAMES = 1024


class InputFileError(ValueError):
    """Raised when the file to parse cannot be used."""


class _ExitCode(IntEnum):
    NO_ERROR = 0
    TCP_SOCKET_ERROR = 1
    CANNOT_OPEN = 2
    BAD_MAGIC = 3
    HEADER_ERROR = 4
    DATA_ERROR = 5
    MISSING_DATA = 6
    INVALID_OPTION = 7


_EXIT_REASONS = {
    _ExitCode.TCP_SOCKET_ERROR: "TCP socket error",
    _ExitCode.CANNOT_OPEN: "file could not be opened",
    _ExitCode.BAD_MAGIC: "invalid perf data file",
    _ExitCode.HEADER_ERROR: "invalid perf data file",
    _ExitCode.DATA_ERROR: "invalid perf data file",
    _ExitCode.MISSING_DATA: "invalid perf data file",
    _ExitCode.INVALID_OPTION: "invalid option",
}


def check_input_file(path: Union[str, os.PathLike]) -> Path:
    """Check that ``path`` is an existing, readable regular file and return it."""
    file_path = Path(path)
    if not file_path.exists():
        raise InputFileError(f"File '{path}' does not exist.")
    if not file_path.is_file():
        raise InputFileError(f"'{path}' is not a file.")
    if not os.access(file_path, os.R_OK):
        raise InputFileError(f"File '{path}' is not readable.")
    return file_path


def parser_arguments(
    path: str,
    sysroot: str = "",
    kallsyms: str = "",
    debug_paths: str = "",
    extra_lib_paths: str = "",
    app_path: str = "",
    arch: str = "",
) -> list[str]:
    """Build the parser's command line arguments; empty settings are left out."""
    args = ["--input", str(path), "--max-frames", str(MAX_FRAMES)]
    optional = (
        ("--sysroot", sysroot),
        ("--kallsyms", kallsyms),
        ("--debug", debug_paths),
        ("--extra", extra_lib_paths),
        ("--app", app_path),
        ("--arch", arch),
    )
    for flag, value in optional:
        if value:
            args += [flag, str(value)]
    return args


def describe_exit_code(exit_code: int) -> Optional[str]:
    """Return the failure message for a parser exit code, or None on success."""
    if exit_code == _ExitCode.NO_ERROR:
        return None
    base = f"The hotspot-perfparser binary exited with code {exit_code}"
    try:
        reason = _EXIT_REASONS.get(_ExitCode(exit_code))
    except ValueError:
        reason = None
    if reason is None:
        return base + "."
    return f"{base} ({reason})."