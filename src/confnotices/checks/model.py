from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Iterable, Optional, Protocol, runtime_checkable

from ..settings import NoticesSettings

ALWAYS = "always"

_CHECK_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*/[a-z][a-z0-9_-]*$")
_GROUP_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*$")


class Severity(IntEnum):
    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Notice:
    severity: Severity
    message: str
    detail: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity(int(self.severity)))
        object.__setattr__(self, "message", str(self.message).strip())
        object.__setattr__(self, "detail", str(self.detail or "").strip())
        if not self.message:
            raise ValueError("notice message cannot be empty")

    @property
    def text(self) -> str:
        return self.message if not self.detail else f"{self.message} {self.detail}"

    def as_dict(self) -> dict[str, object]:
        return {"severity": self.severity.label, "message": self.message, "detail": self.detail}


def info(message: str, detail: str = "") -> Notice:
    return Notice(Severity.INFO, message, detail)


def warning(message: str, detail: str = "") -> Notice:
    return Notice(Severity.WARNING, message, detail)


def error(message: str, detail: str = "") -> Notice:
    return Notice(Severity.ERROR, message, detail)


@runtime_checkable
class ConfigAccessor(Protocol):
    def get(self, path: str, default: object = None) -> object: ...


@runtime_checkable
class FilesystemProbe(Protocol):
    def write_read_delete(self, area: str, relative_path: str) -> bool: ...


@runtime_checkable
class RowCounter(Protocol):
    def count(self, log_kind: str) -> int: ...


@runtime_checkable
class UserDirectory(Protocol):
    def current_user(self) -> str | None: ...

    def is_allowed(self, identity: str, capability: str) -> bool: ...


@runtime_checkable
class ExtensionProbe(Protocol):
    def has(self, capability: str) -> bool: ...


@dataclass(frozen=True)
class RequestInfo:
    host: str
    uri: str = ""
    base_url: str = ""
    has_previous_session: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "host", str(self.host).strip())
        object.__setattr__(self, "uri", str(self.uri or "").strip())
        object.__setattr__(self, "base_url", str(self.base_url or "").strip())

    @property
    def hostname(self) -> str:
        """Host without port; IPv6 literals lose their brackets."""
        host = self.host
        if host.startswith("["):
            return host[1:].split("]", 1)[0]
        if host.count(":") == 1:
            return host.split(":", 1)[0]
        return host


@dataclass(frozen=True)
class RuntimeInfo:
    debug: bool = False
    stable_release: bool = True
    canonical_url: str = ""


@dataclass(frozen=True)
class Probes:
    fs: FilesystemProbe
    rows: RowCounter
    users: UserDirectory
    extensions: ExtensionProbe


@dataclass(frozen=True)
class CheckContext:
    route: str
    request: RequestInfo
    config: ConfigAccessor
    probes: Probes
    runtime: RuntimeInfo = field(default_factory=RuntimeInfo)
    settings: NoticesSettings = field(default_factory=NoticesSettings)

    @property
    def is_auth_route(self) -> bool:
        return self.route in self.settings.auth_routes

    def log_threshold(self) -> int:
        raw = self.config.get("general/configuration_notices/log_threshold", self.settings.log_threshold)
        try:
            return int(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return self.settings.log_threshold


CheckFn = Callable[[CheckContext], Optional[Iterable[Notice]]]


class Check(Protocol):
    id: str
    groups: tuple[str, ...]

    def evaluate(self, ctx: CheckContext) -> Iterable[Notice] | None: ...


def validate_group(group: str) -> str:
    value = str(group).strip()
    if not _GROUP_PATTERN.fullmatch(value):
        raise ValueError(f"invalid group tag `{value}`: expected lowercase letters, digits, `-` or `_`")
    return value


@dataclass(frozen=True)
class CheckDef:
    check_id: str
    fn: CheckFn
    groups: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        cid = str(self.check_id).strip()
        if not _CHECK_ID_PATTERN.fullmatch(cid):
            raise ValueError(f"invalid check id `{cid}`: expected <area>/<name> in lowercase")
        object.__setattr__(self, "check_id", cid)
        object.__setattr__(self, "groups", tuple(validate_group(g) for g in self.groups) or (ALWAYS,))
        object.__setattr__(self, "description", str(self.description).strip())

    @property
    def id(self) -> str:
        return self.check_id

    def evaluate(self, ctx: CheckContext) -> Iterable[Notice] | None:
        return self.fn(ctx)


__all__ = [
    "ALWAYS",
    "Check",
    "CheckContext",
    "CheckDef",
    "CheckFn",
    "ConfigAccessor",
    "ExtensionProbe",
    "FilesystemProbe",
    "Notice",
    "Probes",
    "RequestInfo",
    "RowCounter",
    "RuntimeInfo",
    "Severity",
    "UserDirectory",
    "error",
    "info",
    "validate_group",
    "warning",
]
