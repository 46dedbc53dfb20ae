"""Serialization codecs for run payloads."""

import json
from abc import ABC, abstractmethod
from typing import Any

from xhprof_runs.errors import CorruptPayloadError, PayloadEncodeError


class RunCodec(ABC):
    """Converts run payloads to and from the bytes stored on disk."""

    @abstractmethod
    def encode(self, payload: Any) -> bytes:
        """Serialize a payload."""

    @abstractmethod
    def decode(self, data: bytes, source: str = "<memory>") -> Any:
        """Deserialize bytes produced by ``encode``."""


class JSONRunCodec(RunCodec):
    """UTF-8 JSON encoding.

    Payloads are JSON-compatible trees: mappings with string keys, lists, and
    ``str``/``int``/``float``/``bool``/``None`` leaves. Non-string keys and
    non-finite floats are rejected rather than coerced, so a decoded payload
    always equals the one that was encoded.
    """

    def __init__(self, indent: int | None = None) -> None:
        self.indent = indent

    def encode(self, payload: Any) -> bytes:
        self._check_keys(payload)
        try:
            text = json.dumps(payload, ensure_ascii=False, allow_nan=False, indent=self.indent)
        except (TypeError, ValueError, RecursionError) as e:
            raise PayloadEncodeError(f"Payload is not JSON serializable: {e}") from e
        return text.encode("utf-8")

    def decode(self, data: bytes, source: str = "<memory>") -> Any:
        try:
            return json.loads(data.decode("utf-8"), parse_constant=self._reject_constant)
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            raise CorruptPayloadError(source, str(e)) from e

    def _check_keys(self, payload: Any) -> None:
        stack = [payload]
        seen: set[int] = set()
        while stack:
            node = stack.pop()
            if isinstance(node, dict):
                if id(node) in seen:
                    continue
                seen.add(id(node))
                for key, value in node.items():
                    if not isinstance(key, str):
                        raise PayloadEncodeError(f"Payload keys must be strings, got {type(key).__name__}: {key!r}")
                    stack.append(value)
            elif isinstance(node, (list, tuple)):
                if id(node) in seen:
                    continue
                seen.add(id(node))
                stack.extend(node)

    @staticmethod
    def _reject_constant(name: str) -> float:
        raise ValueError(f"non-finite number {name} in payload")
