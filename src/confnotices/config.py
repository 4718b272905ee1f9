from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError
from .settings import load_yaml

_MISSING = object()


def split_path(path: str) -> tuple[str, ...]:
    raw = str(path).strip().strip("/")
    if not raw:
        return ()
    sep = "/" if "/" in raw else "."
    return tuple(part for part in raw.split(sep) if part)


class MappingConfig:
    """Read-only `get(path, default)` over nested mappings.

    Paths use `/` (``general/mailoptions``); dotted paths are accepted when the
    path holds no `/`.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: Mapping[str, Any] = dict(data or {})

    @classmethod
    def from_yaml(cls, path: str | Path) -> MappingConfig:
        payload = load_yaml(Path(path))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ConfigError(f"{path}: root must be a mapping")
        return cls(payload)

    def get(self, path: str, default: object = None) -> object:
        node: object = self._data
        for part in split_path(path):
            if not isinstance(node, Mapping):
                return default
            node = node.get(part, _MISSING)
            if node is _MISSING:
                return default
        return node

    def __contains__(self, path: object) -> bool:
        return self.get(str(path), _MISSING) is not _MISSING


__all__ = ["MappingConfig", "split_path"]
