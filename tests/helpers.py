from __future__ import annotations

import io
import json
from typing import Any, Mapping

from confnotices.checks.domains import register_defaults
from confnotices.checks.model import Probes, RequestInfo, RuntimeInfo
from confnotices.checks.registry import CheckRegistry
from confnotices.checks.runner import CheckRunner
from confnotices.config import MappingConfig
from confnotices.logging import StructuredLog
from confnotices.notices.sink import Presenter
from confnotices.settings import NoticesSettings


class Calls:
    def __init__(self) -> None:
        self.rows: list[tuple[str, str]] = []

    def add(self, who: str, what: str) -> None:
        self.rows.append((who, what))

    def __len__(self) -> int:
        return len(self.rows)


class SpyConfig(MappingConfig):
    def __init__(self, calls: Calls, data: Mapping[str, Any] | None = None) -> None:
        super().__init__(data)
        self._calls = calls

    def get(self, path: str, default: object = None) -> object:
        self._calls.add("config", path)
        return super().get(path, default)


class SpyFS:
    def __init__(self, calls: Calls, unwritable: Mapping[str, object] | None = None) -> None:
        self._calls = calls
        self._unwritable = dict(unwritable or {})

    def write_read_delete(self, area: str, relative_path: str) -> bool:
        self._calls.add("fs", f"{area}:{relative_path}")
        folder = f"{area}/{relative_path.split('/', 1)[0]}"
        outcome = self._unwritable.get(folder)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome is None


class SpyRows:
    def __init__(self, calls: Calls, counts: Mapping[str, int] | None = None) -> None:
        self._calls = calls
        self._counts = dict(counts or {})

    def count(self, log_kind: str) -> int:
        self._calls.add("rows", log_kind)
        return self._counts.get(log_kind, 0)


class SpyUsers:
    def __init__(self, calls: Calls, user: str | None = None, capabilities: tuple[str, ...] = ()) -> None:
        self._calls = calls
        self._user = user
        self._caps = set(capabilities)

    def current_user(self) -> str | None:
        self._calls.add("users", "current_user")
        return self._user

    def is_allowed(self, identity: str, capability: str) -> bool:
        self._calls.add("users", f"is_allowed:{capability}")
        return identity == self._user and capability in self._caps


class SpyExtensions:
    def __init__(self, calls: Calls, available: tuple[str, ...] = ("gd", "exif", "fileinfo")) -> None:
        self._calls = calls
        self._available = set(available)

    def has(self, capability: str) -> bool:
        self._calls.add("extensions", capability)
        return capability in self._available


def healthy_config() -> dict[str, Any]:
    return {
        "general": {
            "mailoptions": {"transport": "smtp"},
            "thumbnails": {"notfound_image": "assets://img/default_notfound.png", "error_image": "assets://img/default_error.png"},
        }
    }


def make_probes(
    calls: Calls,
    *,
    unwritable: Mapping[str, object] | None = None,
    counts: Mapping[str, int] | None = None,
    user: str | None = None,
    capabilities: tuple[str, ...] = (),
    extensions: tuple[str, ...] = ("gd", "exif", "fileinfo"),
) -> Probes:
    return Probes(
        fs=SpyFS(calls, unwritable),
        rows=SpyRows(calls, counts),
        users=SpyUsers(calls, user, capabilities),
        extensions=SpyExtensions(calls, extensions),
    )


def make_runner(
    calls: Calls | None = None,
    *,
    config: Mapping[str, Any] | None = None,
    registry: CheckRegistry | None = None,
    runtime: RuntimeInfo | None = None,
    settings: NoticesSettings | None = None,
    presenter: Presenter | None = None,
    stream: io.StringIO | None = None,
    **probe_kwargs: Any,
) -> CheckRunner:
    spy = calls if calls is not None else Calls()
    return CheckRunner(
        registry if registry is not None else register_defaults(CheckRegistry()),
        config=SpyConfig(spy, healthy_config() if config is None else config),
        probes=make_probes(spy, **probe_kwargs),
        runtime=runtime,
        settings=settings,
        presenter=presenter,
        log=StructuredLog(json_output=True, min_level="debug", stream=stream if stream is not None else io.StringIO()),
        pass_ids=lambda: "pass-test",
    )


def request(host: str = "example.org", uri: str = "", base_url: str = "", has_previous_session: bool = True) -> RequestInfo:
    return RequestInfo(host=host, uri=uri or f"https://{host}/", base_url=base_url, has_previous_session=has_previous_session)


def log_events(stream: io.StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]
