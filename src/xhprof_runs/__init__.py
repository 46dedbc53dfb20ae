"""xhprof-runs - filesystem storage for XHProf profiling runs."""

from .config import RunStoreSettings
from .errors import (
    CorruptPayloadError,
    InvalidRunIdError,
    PartialSweepError,
    PayloadEncodeError,
    RunStoreError,
    RunWriteError,
)
from .models import Payload, RunListing, RunLookup
from .storage import FileRunStore, JSONRunCodec, RunCodec, RunStore
from .version import __version__


__all__ = [
    # Stores
    "RunStore",
    "FileRunStore",
    "RunStoreSettings",
    # Codecs
    "RunCodec",
    "JSONRunCodec",
    # Models
    "Payload",
    "RunListing",
    "RunLookup",
    # Errors
    "RunStoreError",
    "InvalidRunIdError",
    "PayloadEncodeError",
    "CorruptPayloadError",
    "RunWriteError",
    "PartialSweepError",
]
