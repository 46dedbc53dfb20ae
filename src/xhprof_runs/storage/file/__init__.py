from xhprof_runs.storage.file.store import FileRunStore


__all__ = ["FileRunStore"]
