"""Preparation of perf record command lines and checks of the recording host."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Iterable, Sequence, Union

PERF_BINARY = "perf"
TRACING_ROOT = "/sys/kernel/debug/tracing"
PERF_EVENT_PARANOID = "/proc/sys/kernel/perf_event_paranoid"
SCHED_SWITCH_TRACE_PATH = "events/sched/sched_switch"

PathLike = Union[str, os.PathLike]


class RecordingError(RuntimeError):
    """Raised when a recording cannot be set up."""


def sudo_options(sudo_binary: str, active_window: int) -> list[str]:
    """Options for the graphical sudo utility at ``sudo_binary``.

    The KDE utilities get attached to ``active_window`` so their dialog is
    transient for it; ``kdesu`` is also asked to show text output.
    """
    options: list[str] = []
    if sudo_binary.endswith("/kdesudo") or sudo_binary.endswith("/kdesu"):
        options += ["--attach", str(active_window)]
    if sudo_binary.endswith("/kdesu"):
        options.append("-t")
    return options


def check_output_folder(output_path: PathLike) -> str:
    """Check the folder that will hold ``output_path`` and return its path."""
    folder = os.path.dirname(os.fspath(output_path)) or "."
    if not os.path.exists(folder):
        raise RecordingError(f"Folder '{folder}' does not exist.")
    if not os.path.isdir(folder):
        raise RecordingError(f"'{folder}' is not a folder.")
    if not os.access(folder, os.W_OK):
        raise RecordingError(f"Folder '{folder}' is not writable.")
    return folder


def resolve_executable(exe_path: PathLike) -> str:
    """Find the program to record, searching PATH when it is not a file path.

    Returns the absolute path of the executable.
    """
    name = os.fspath(exe_path)
    candidate = Path(name)
    if not candidate.exists():
        found = shutil.which(name)
        if found:
            candidate = Path(found)
    if not candidate.exists():
        raise RecordingError(f"File '{name}' does not exist.")
    if not candidate.is_file():
        raise RecordingError(f"'{name}' is not a file.")
    if not os.access(candidate, os.X_OK):
        raise RecordingError(f"File '{name}' is not executable.")
    return str(candidate.absolute())


def record_command(
    output_path: PathLike,
    perf_options: Sequence[str] = (),
    record_options: Sequence[str] = (),
) -> list[str]:
    """Arguments for ``perf`` that record into ``output_path``."""
    return ["record", "-o", os.fspath(output_path), *perf_options, *record_options]


def pid_record_options(perf_options: Sequence[str], pids: Iterable[Union[str, int]]) -> list[str]:
    """Perf options that attach to the processes ``pids``."""
    pid_list = [str(pid) for pid in pids]
    if not pid_list:
        raise RecordingError("Process does not exist.")
    return [*perf_options, "--pid", ",".join(pid_list)]


def application_record_options(exe_path: PathLike, exe_options: Sequence[str] = ()) -> list[str]:
    """Record options that launch the application ``exe_path`` with its arguments."""
    return [resolve_executable(exe_path), *exe_options]


def system_record_options(perf_options: Sequence[str]) -> list[str]:
    """Perf options that record the whole system."""
    return [*perf_options, "--all-cpus"]


def off_cpu_profiling_options() -> list[str]:
    """Perf options that record context switches for off-CPU profiling."""
    return ["--switch-events", "--event", "sched:sched_switch"]


def help_supports(help_text: Union[str, bytes], option: str) -> bool:
    """Whether the ``perf record --help`` output mentions ``option``."""
    if isinstance(help_text, bytes):
        return option.encode() in help_text
    return option in help_text


def can_trace(
    path: str,
    tracing_root: PathLike = TRACING_ROOT,
    paranoid_file: PathLike = PERF_EVENT_PARANOID,
) -> bool:
    """Whether the trace point at ``path`` below ``tracing_root`` is usable.

    The trace point folder must be readable and perf's paranoia level must be -1.
    """
    trace_dir = Path(tracing_root) / path
    if not trace_dir.is_dir() or not os.access(trace_dir, os.R_OK):
        return False
    try:
        level = Path(paranoid_file).read_bytes().strip()
    except OSError:
        return False
    return level == b"-1"