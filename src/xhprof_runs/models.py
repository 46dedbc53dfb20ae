"""Run listing and lookup models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, NamedTuple


Payload = dict[str, Any]


class RunLookup(NamedTuple):
    """Result of fetching a run: the decoded payload and a human-readable description.

    ``payload`` is ``None`` when no file exists for the requested run.
    """

    payload: Payload | None
    description: str

    @property
    def found(self) -> bool:
        return self.payload is not None


@dataclass(frozen=True)
class RunListing:
    """Metadata for one stored run, recovered from its file."""

    run_id: str
    namespace: str
    modified_at: datetime
    size_bytes: int
    file_path: Path

    @property
    def file_name(self) -> str:
        return self.file_path.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "namespace": self.namespace,
            "modified_at": self.modified_at.isoformat(),
            "size_bytes": self.size_bytes,
            "file_path": str(self.file_path),
        }
