"""File naming rules for run files.

A run is stored as ``{run_id}.{namespace}.{suffix}``, or ``{run_id}.{suffix}``
when the namespace is empty or equal to the suffix.
"""

import secrets
import time
from pathlib import Path

from xhprof_runs.errors import InvalidRunIdError


UNSAFE_CHARS = ("\\", "/", "\0")
SEGMENT_SEPARATOR = "."


def sanitize(name: str) -> str:
    """Strip path separators and NUL bytes from a basename."""
    for ch in UNSAFE_CHARS:
        name = name.replace(ch, "")
    return name


def run_basename(run_id: str, namespace: str, suffix: str) -> str:
    if namespace == "" or namespace == suffix:
        name = f"{run_id}.{suffix}"
    else:
        name = f"{run_id}.{namespace}.{suffix}"
    return sanitize(name)


def run_path(root: Path | None, run_id: str, namespace: str, suffix: str) -> Path:
    basename = run_basename(run_id, namespace, suffix)
    if root is None or str(root) == "":
        return Path(basename)
    return Path(root) / basename


def is_managed(name: str, suffix: str) -> bool:
    """Whether a basename belongs to the store: at least two dot-separated segments, the last being the suffix."""
    parts = name.split(SEGMENT_SEPARATOR)
    return len(parts) >= 2 and parts[-1] == suffix


def parse_basename(name: str, suffix: str) -> tuple[str, str]:
    """Recover ``(run_id, namespace)`` from a run file basename.

    Only the first two segments are considered. A file without a namespace
    segment yields an empty namespace.
    """
    parts = name.split(SEGMENT_SEPARATOR)
    run_id = parts[0]
    namespace = parts[1] if len(parts) > 1 else ""
    if namespace == suffix and len(parts) == 2:
        namespace = ""
    return run_id, namespace


def generate_run_id() -> str:
    """Time-ordered hex id with a random tail, e.g. ``65a1f0c3b2e4d-9f2c1a7e``."""
    ns = time.time_ns()
    seconds, micros = divmod(ns // 1000, 1_000_000)
    return f"{seconds:08x}{micros:05x}-{secrets.token_hex(4)}"


def validate_identifier(value: str, kind: str, allow_empty: bool = False) -> str:
    """Reject identifiers that would make a stored file ambiguous to parse back."""
    if not isinstance(value, str):
        raise InvalidRunIdError(f"{kind} must be a string, got {type(value).__name__}")
    if not value and not allow_empty:
        raise InvalidRunIdError(f"{kind} must not be empty")
    if SEGMENT_SEPARATOR in value:
        raise InvalidRunIdError(f"{kind} must not contain '{SEGMENT_SEPARATOR}': {value!r}")
    if not sanitize(value) and value:
        raise InvalidRunIdError(f"{kind} is empty once path separators are removed: {value!r}")
    return value
