"""Storage module for persisting profiler runs."""

from xhprof_runs.storage.base import RunStore
from xhprof_runs.storage.codec import JSONRunCodec, RunCodec
from xhprof_runs.storage.file import FileRunStore


__all__ = ["FileRunStore", "JSONRunCodec", "RunCodec", "RunStore"]
