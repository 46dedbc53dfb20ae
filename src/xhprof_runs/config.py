"""Run store configuration."""

import tempfile
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SUFFIX = "xhprof"

_FORBIDDEN_SUFFIX_CHARS = (".", "/", "\\", "\0")


class RunStoreSettings(BaseSettings):
    """Configuration for a filesystem run store.

    Loads from environment variables automatically:
        XHPROF_OUTPUT_DIR, XHPROF_SUFFIX, XHPROF_STRICT, XHPROF_CREATE_DIR

    Or pass values directly to the constructor.
    """

    output_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()),
        description="Directory holding run files",
    )
    suffix: str = Field(default=DEFAULT_SUFFIX, description="Extension identifying managed run files")
    strict: bool = Field(
        default=False,
        description="Raise on write and sweep failures instead of only logging them",
    )
    create_dir: bool = Field(default=True, description="Create output_dir when the store is built")

    model_config = SettingsConfigDict(
        env_prefix="XHPROF_",
        extra="forbid",
        frozen=True,
    )

    @field_validator("suffix")
    @classmethod
    def _check_suffix(cls, value: str) -> str:
        if not value:
            raise ValueError("suffix must not be empty")
        if any(ch in value for ch in _FORBIDDEN_SUFFIX_CHARS):
            raise ValueError("suffix must not contain '.', path separators or NUL")
        return value
