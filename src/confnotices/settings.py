"""Engine settings: route allow-list, group order, thresholds and probe targets.

Settings come from an optional YAML file validated against
``schemas/confnotices.settings.v1.schema.json``. A missing file means defaults.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError

SETTINGS_SCHEMA = Path(__file__).resolve().parent / "schemas" / "confnotices.settings.v1.schema.json"
SETTINGS_ENV = "CONFNOTICES_SETTINGS"
LOG_JSON_ENV = "CONFNOTICES_LOG_JSON"

DEFAULT_ROUTE_GROUPS: dict[str, tuple[str, ...]] = {
    "dashboard": ("entry", "dashboard"),
    "login": ("entry",),
    "userfirst": ("entry",),
}
DEFAULT_GROUP_ORDER: tuple[str, ...] = ("entry", "dashboard")
DEFAULT_AUTH_ROUTES: frozenset[str] = frozenset({"login", "userfirst"})
DEFAULT_LOG_THRESHOLD = 10_000


@dataclass(frozen=True)
class WritableFolder:
    area: str
    folder: str
    label: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "area", str(self.area).strip())
        object.__setattr__(self, "folder", str(self.folder).strip().strip("/"))
        object.__setattr__(self, "label", str(self.label).strip() or f"<tt>{self.folder}/</tt>")


DEFAULT_WRITABLE_FOLDERS: tuple[WritableFolder, ...] = (
    WritableFolder("web", "files", "<tt>files/</tt> in the webroot"),
    WritableFolder("web", "extensions", "<tt>extensions/</tt> in the webroot"),
    WritableFolder("app", "config", "<tt>app/config/</tt>"),
    WritableFolder("app", "cache", "<tt>app/cache/</tt>"),
)
SQLITE_DATABASE_FOLDER = WritableFolder("app", "database", "<tt>app/database/</tt>")


@dataclass(frozen=True)
class NoticesSettings:
    route_groups: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_ROUTE_GROUPS))
    group_order: tuple[str, ...] = DEFAULT_GROUP_ORDER
    auth_routes: frozenset[str] = DEFAULT_AUTH_ROUTES
    log_threshold: int = DEFAULT_LOG_THRESHOLD
    local_domains: tuple[str, ...] = ()
    writable_folders: tuple[WritableFolder, ...] = DEFAULT_WRITABLE_FOLDERS
    log_json: bool = False
    log_level: str = "info"

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> NoticesSettings:
        base = cls()
        route_groups = payload.get("route_groups")
        group_order = payload.get("group_order")
        folders = payload.get("writable_folders")
        return cls(
            route_groups=(
                {str(route): tuple(str(g) for g in groups) for route, groups in route_groups.items()}
                if isinstance(route_groups, Mapping)
                else base.route_groups
            ),
            group_order=tuple(str(g) for g in group_order) if group_order is not None else base.group_order,
            auth_routes=frozenset(str(r) for r in payload.get("auth_routes", base.auth_routes)),
            log_threshold=int(payload.get("log_threshold", base.log_threshold)),
            local_domains=tuple(str(d) for d in payload.get("local_domains", ())),
            writable_folders=(
                tuple(WritableFolder(row["area"], row["folder"], row.get("label", "")) for row in folders)
                if folders is not None
                else base.writable_folders
            ),
            log_json=bool(payload.get("log_json", base.log_json)),
            log_level=str(payload.get("log_level", base.log_level)),
        )


def _load_schema() -> dict[str, Any]:
    return json.loads(SETTINGS_SCHEMA.read_text(encoding="utf-8"))


def validate_settings_payload(payload: Any, *, source: str = "<settings>") -> None:
    import jsonschema

    try:
        jsonschema.validate(payload, _load_schema())
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ConfigError(f"settings validation failed for {source} at {loc}: {exc.message}") from exc


def load_yaml(path: Path) -> Any:
    import yaml

    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc


def load_settings(path: str | Path | None = None, *, env: Mapping[str, str] | None = None) -> NoticesSettings:
    environ = os.environ if env is None else env
    raw_path = path if path is not None else environ.get(SETTINGS_ENV)
    payload: Any = {}
    if raw_path:
        settings_path = Path(raw_path)
        if settings_path.is_file():
            payload = load_yaml(settings_path)
            if payload is None:
                payload = {}
            validate_settings_payload(payload, source=str(settings_path))
        elif path is not None:
            raise ConfigError(f"settings file not found: {settings_path}")
    settings = NoticesSettings.from_payload(payload)
    if environ.get(LOG_JSON_ENV, "").strip() == "1":
        settings = replace(settings, log_json=True)
    return settings


__all__ = [
    "DEFAULT_AUTH_ROUTES",
    "DEFAULT_GROUP_ORDER",
    "DEFAULT_LOG_THRESHOLD",
    "DEFAULT_ROUTE_GROUPS",
    "DEFAULT_WRITABLE_FOLDERS",
    "LOG_JSON_ENV",
    "NoticesSettings",
    "SETTINGS_ENV",
    "SETTINGS_SCHEMA",
    "SQLITE_DATABASE_FOLDER",
    "WritableFolder",
    "load_settings",
    "load_yaml",
    "validate_settings_payload",
]
