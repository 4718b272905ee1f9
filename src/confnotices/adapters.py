"""Local reference adapters for the collaborator protocols.

Host applications normally supply their own; these back the CLI and tests.
"""

from __future__ import annotations

import importlib.util
from contextlib import suppress
from pathlib import Path
from typing import Iterable, Mapping

PROBE_PAYLOAD = "ok"

DEFAULT_CAPABILITY_MODULES: dict[str, tuple[str, ...]] = {
    "gd": ("PIL.Image",),
    "exif": ("PIL.ExifTags",),
    "fileinfo": ("magic",),
}


class LocalFilesystemProbe:
    """Write, read back and delete a probe file under a named mount."""

    def __init__(self, mounts: Mapping[str, Path | str]) -> None:
        self._mounts = {str(area): Path(root).resolve() for area, root in mounts.items()}

    def _resolve(self, area: str, relative_path: str) -> Path | None:
        root = self._mounts.get(str(area))
        if root is None:
            return None
        target = (root / str(relative_path).lstrip("/")).resolve()
        if target != root and root not in target.parents:
            return None
        return target

    def write_read_delete(self, area: str, relative_path: str) -> bool:
        target = self._resolve(area, relative_path)
        if target is None or not target.parent.is_dir():
            return False
        try:
            target.write_text(PROBE_PAYLOAD, encoding="utf-8")
            return target.read_text(encoding="utf-8") == PROBE_PAYLOAD
        except OSError:
            return False
        finally:
            with suppress(OSError):
                target.unlink(missing_ok=True)


class ImportExtensionProbe:
    def __init__(self, modules: Mapping[str, Iterable[str]] | None = None) -> None:
        source = DEFAULT_CAPABILITY_MODULES if modules is None else modules
        self._modules = {str(cap): tuple(names) for cap, names in source.items()}

    def has(self, capability: str) -> bool:
        names = self._modules.get(str(capability))
        if not names:
            return False
        return all(_module_available(name) for name in names)


def _module_available(name: str) -> bool:
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError):
        return False


class StaticExtensionProbe:
    def __init__(self, available: Iterable[str] = ()) -> None:
        self._available = frozenset(str(cap) for cap in available)

    def has(self, capability: str) -> bool:
        return str(capability) in self._available


class StaticRowCounter:
    def __init__(self, counts: Mapping[str, int] | None = None) -> None:
        self._counts = {str(kind): int(value) for kind, value in (counts or {}).items()}

    def count(self, log_kind: str) -> int:
        return self._counts.get(str(log_kind), 0)


class StaticUsers:
    def __init__(self, user: str | None = None, capabilities: Iterable[str] = ()) -> None:
        self._user = user
        self._capabilities = frozenset(str(cap) for cap in capabilities)

    def current_user(self) -> str | None:
        return self._user

    def is_allowed(self, identity: str, capability: str) -> bool:
        return identity == self._user and str(capability) in self._capabilities


__all__ = [
    "DEFAULT_CAPABILITY_MODULES",
    "ImportExtensionProbe",
    "LocalFilesystemProbe",
    "PROBE_PAYLOAD",
    "StaticExtensionProbe",
    "StaticRowCounter",
    "StaticUsers",
]
