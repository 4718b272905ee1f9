from __future__ import annotations

from ...errors import RegistryError
from ..model import CheckDef
from ..registry import CheckRegistry
from . import config, ext, fs, host, logs, runtime

DEFAULT_ORDER: tuple[str, ...] = (
    "host/single-hostname",
    "host/ip-address",
    "host/subfolder",
    "fs/writable-folders",
    "config/mail",
    "runtime/development-version",
    "runtime/debug-live",
    "ext/gd",
    "fs/thumbs-folder",
    "host/canonical",
    "ext/image-functions",
    "config/maintenance",
    "config/thumbnails",
    "logs/changelog",
    "logs/systemlog",
)


def default_checks() -> tuple[CheckDef, ...]:
    by_id: dict[str, CheckDef] = {}
    for check in (*config.CHECKS, *ext.CHECKS, *fs.CHECKS, *host.CHECKS, *logs.CHECKS, *runtime.CHECKS):
        by_id[check.check_id] = check
    unordered = sorted(set(by_id) - set(DEFAULT_ORDER))
    if unordered:
        raise RegistryError(f"built-in checks missing from DEFAULT_ORDER: {', '.join(unordered)}")
    return tuple(by_id[cid] for cid in DEFAULT_ORDER)


def register_defaults(registry: CheckRegistry) -> CheckRegistry:
    registry.register_all(default_checks())
    return registry


__all__ = ["DEFAULT_ORDER", "default_checks", "register_defaults"]
