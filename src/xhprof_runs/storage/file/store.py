"""Filesystem storage backend for profiler runs."""

import logging
import os
import stat
import tempfile
from datetime import UTC, datetime
from pathlib import Path

from xhprof_runs.config import RunStoreSettings
from xhprof_runs.errors import PartialSweepError, RunWriteError
from xhprof_runs.models import Payload, RunListing, RunLookup
from xhprof_runs.storage.base import RunStore
from xhprof_runs.storage.codec import JSONRunCodec, RunCodec
from xhprof_runs.storage.file.naming import (
    generate_run_id,
    is_managed,
    parse_basename,
    run_path,
    validate_identifier,
)


logger = logging.getLogger(__name__)

TEMP_PREFIX = ".tmp-"


class FileRunStore(RunStore):
    """Stores each run as one file in a directory.

    Write failures and failed deletions during ``delete_all_runs`` are logged
    and otherwise ignored; ``save_run`` still returns the run id. Set
    ``strict`` to raise ``RunWriteError`` / ``PartialSweepError`` instead.
    """

    def __init__(
        self,
        output_dir: str | Path | None = None,
        suffix: str | None = None,
        *,
        strict: bool | None = None,
        codec: RunCodec | None = None,
        settings: RunStoreSettings | None = None,
    ) -> None:
        overrides: dict[str, object] = {}
        if output_dir is not None:
            overrides["output_dir"] = Path(output_dir)
        if suffix is not None:
            overrides["suffix"] = suffix
        if strict is not None:
            overrides["strict"] = strict
        if settings is None:
            settings = RunStoreSettings(**overrides)  # type: ignore[arg-type]
        elif overrides:
            settings = RunStoreSettings(**{**settings.model_dump(), **overrides})  # type: ignore[arg-type]
        self.settings = settings
        self.codec = codec or JSONRunCodec()
        if settings.create_dir:
            self.root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self.settings.output_dir

    @property
    def suffix(self) -> str:
        return self.settings.suffix

    @property
    def strict(self) -> bool:
        return self.settings.strict

    def file_name(self, run_id: str, namespace: str = "") -> Path:
        """Path of the file holding a run."""
        return run_path(self.root, run_id, namespace, self.suffix)

    def save_run(self, payload: Payload, namespace: str = "", run_id: str | None = None) -> str:
        validate_identifier(namespace, "namespace", allow_empty=True)
        if run_id is None:
            run_id = generate_run_id()
        else:
            validate_identifier(run_id, "run_id")

        data = self.codec.encode(payload)
        path = self.file_name(run_id, namespace)
        try:
            self._write_replace(path, data)
        except OSError as e:
            if self.strict:
                raise RunWriteError(path, e) from e
            logger.error("Could not write run file %s: %s", path, e)
        else:
            logger.debug("Saved run %s (namespace=%r) to %s", run_id, namespace, path)
        return run_id

    def _write_replace(self, path: Path, data: bytes) -> None:
        # Temp names are dot-files without the suffix segment, so they are never listed or swept.
        mode = _file_mode(path)
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(dir=path.parent, prefix=TEMP_PREFIX, delete=False) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, path)
        except OSError:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise

    def get_run(self, run_id: str, namespace: str = "") -> RunLookup:
        path = self.file_name(run_id, namespace)
        try:
            with path.open("rb") as f:
                data = f.read()
        except FileNotFoundError:
            logger.error("Could not find file %s", path)
            return RunLookup(None, f"Invalid Run Id = {run_id}")

        payload = self.codec.decode(data, source=str(path))
        return RunLookup(payload, f"Run (Namespace={namespace})")

    def delete_run(self, run_id: str, namespace: str = "") -> bool:
        path = self.file_name(run_id, namespace)
        if not is_managed(path.name, self.suffix):
            logger.warning("Refusing to delete unmanaged file %s", path)
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            logger.info("No run file to delete at %s", path)
            return False
        except OSError as e:
            logger.error("Could not delete run file %s: %s", path, e)
            return False
        return True

    def delete_all_runs(self) -> int:
        removed = 0
        failed: list[Path] = []
        try:
            scanner = os.scandir(self.root)
        except FileNotFoundError:
            logger.info("Run directory %s does not exist; nothing to delete", self.root)
            return 0
        with scanner as entries:
            for entry in entries:
                if not is_managed(entry.name, self.suffix):
                    continue
                path = Path(entry.path)
                try:
                    path.unlink()
                except OSError as e:
                    logger.error("Could not delete run file %s: %s", path, e)
                    failed.append(path)
                    continue
                removed += 1

        if failed and self.strict:
            raise PartialSweepError(failed, removed)
        return removed

    def list_runs(self) -> list[RunListing]:
        listings: list[RunListing] = []
        ending = f".{self.suffix}"
        try:
            scanner = os.scandir(self.root)
        except FileNotFoundError:
            return listings
        with scanner as entries:
            for entry in entries:
                name = entry.name
                if name.startswith(".") or not name.endswith(ending):
                    continue
                try:
                    if not entry.is_file():
                        continue
                    info = entry.stat()
                except FileNotFoundError:
                    # Deleted between scan and stat.
                    continue
                run_id, namespace = parse_basename(name, self.suffix)
                listings.append(
                    RunListing(
                        run_id=run_id,
                        namespace=namespace,
                        modified_at=datetime.fromtimestamp(info.st_mtime, tz=UTC),
                        size_bytes=info.st_size,
                        file_path=Path(entry.path),
                    )
                )

        # Newest first; identical mtimes fall back to path order.
        listings.sort(key=lambda r: str(r.file_path))
        listings.sort(key=lambda r: r.modified_at, reverse=True)
        return listings


def _file_mode(path: Path) -> int:
    """Permission bits for a run file: those of the file being replaced, else 0666 less the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
