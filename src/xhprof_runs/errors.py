"""Errors raised by run stores."""

from pathlib import Path


class RunStoreError(Exception):
    """Base class for run store failures."""


class InvalidRunIdError(RunStoreError, ValueError):
    """A run id or namespace cannot be stored without ambiguity."""


class PayloadEncodeError(RunStoreError, TypeError):
    """The payload cannot be serialized by the codec."""


class CorruptPayloadError(RunStoreError, ValueError):
    """A stored run exists but its contents cannot be decoded."""

    def __init__(self, path: Path | str, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"Corrupt run file {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RunWriteError(RunStoreError, OSError):
    """A run could not be written to its file."""

    def __init__(self, path: Path | str, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Could not write run file {self.path}: {cause}")


class PartialSweepError(RunStoreError):
    """Some managed files survived a delete-all sweep."""

    def __init__(self, failed: list[Path], removed: int) -> None:
        self.failed = failed
        self.removed = removed
        super().__init__(f"Removed {removed} run(s); failed to remove {len(failed)}: {', '.join(map(str, failed))}")
