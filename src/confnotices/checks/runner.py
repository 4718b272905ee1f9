from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from ..logging import StructuredLog
from ..notices.sink import NoticeSink, Presenter
from ..settings import NoticesSettings
from .model import Check, CheckContext, ConfigAccessor, Notice, Probes, RequestInfo, RuntimeInfo
from .registry import CheckRegistry
from .routes import RouteClassifier


class CheckStatus(str, Enum):
    PASS = "pass"
    NOTICE = "notice"
    ERROR = "error"


@dataclass(frozen=True)
class CheckRow:
    check_id: str
    group: str
    status: CheckStatus
    duration_ms: int = 0
    notice_count: int = 0
    error: str = ""

    def as_dict(self) -> dict[str, object]:
        return {
            "id": self.check_id,
            "group": self.group,
            "status": self.status.value,
            "duration_ms": self.duration_ms,
            "notice_count": self.notice_count,
            "error": self.error,
        }


@dataclass(frozen=True)
class PassReport:
    route: str
    groups: tuple[str, ...] = ()
    notices: tuple[Notice, ...] = ()
    rows: tuple[CheckRow, ...] = ()
    duration_ms: int = 0
    pass_id: str = ""
    summary: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.summary:
            object.__setattr__(
                self,
                "summary",
                {
                    "passed": sum(1 for row in self.rows if row.status == CheckStatus.PASS),
                    "noticed": sum(1 for row in self.rows if row.status == CheckStatus.NOTICE),
                    "errors": sum(1 for row in self.rows if row.status == CheckStatus.ERROR),
                    "total": len(self.rows),
                    "notices": len(self.notices),
                },
            )

    @property
    def skipped(self) -> bool:
        return not self.groups

    def as_payload(self) -> dict[str, object]:
        return {
            "schema_version": 1,
            "tool": "confnotices",
            "kind": "notices-pass",
            "pass_id": self.pass_id,
            "route": self.route,
            "groups": list(self.groups),
            "status": "skipped" if self.skipped else ("ok" if not self.notices else "notices"),
            "notices": [notice.as_dict() for notice in self.notices],
            "checks": [row.as_dict() for row in self.rows],
            "summary": dict(self.summary),
            "duration_ms": self.duration_ms,
        }


def _new_pass_id() -> str:
    return uuid.uuid4().hex[:12]


class CheckRunner:
    def __init__(
        self,
        registry: CheckRegistry,
        *,
        config: ConfigAccessor,
        probes: Probes,
        runtime: RuntimeInfo | None = None,
        settings: NoticesSettings | None = None,
        classifier: RouteClassifier | None = None,
        presenter: Presenter | None = None,
        log: StructuredLog | None = None,
        pass_ids: Callable[[], str] = _new_pass_id,
    ) -> None:
        self._registry = registry
        self._config = config
        self._probes = probes
        self._runtime = runtime or RuntimeInfo()
        self._settings = settings or NoticesSettings()
        self._classifier = classifier or RouteClassifier.from_settings(self._settings)
        self._presenter = presenter
        self._log = log or StructuredLog(json_output=self._settings.log_json, min_level=self._settings.log_level)
        self._pass_ids = pass_ids

    @property
    def registry(self) -> CheckRegistry:
        return self._registry

    @property
    def classifier(self) -> RouteClassifier:
        return self._classifier

    def build_context(self, route: str, request: RequestInfo, runtime: RuntimeInfo | None = None) -> CheckContext:
        return CheckContext(
            route=route,
            request=request,
            config=self._config,
            probes=self._probes,
            runtime=runtime or self._runtime,
            settings=self._settings,
        )

    def run(self, route: str, request: RequestInfo) -> tuple[Notice, ...]:
        return self.run_pass(route, request).notices

    def run_pass(self, route: str, request: RequestInfo, *, runtime: RuntimeInfo | None = None) -> PassReport:
        groups = self._classifier.groups_for(route)
        if not groups:
            return PassReport(route=str(route or ""))

        pass_id = self._pass_ids()
        log = self._log.bind(pass_id)
        ctx = self.build_context(route, request, runtime)
        sink = NoticeSink(self._presenter, log)
        collected: list[Notice] = []
        rows: list[CheckRow] = []
        executed: set[str] = set()
        started = time.perf_counter()
        for group in groups:
            for check in self._registry.checks_for(group):
                cid = str(check.id)
                if cid in executed:
                    continue
                executed.add(cid)
                notices, row = self._execute(check, group, ctx, log)
                collected.extend(notices)
                rows.append(row)
        result = sink.submit(collected)
        duration_ms = int((time.perf_counter() - started) * 1000)
        report = PassReport(
            route=route,
            groups=groups,
            notices=result,
            rows=tuple(rows),
            duration_ms=duration_ms,
            pass_id=pass_id,
        )
        log.event(
            "debug",
            "runner",
            "pass_complete",
            route=route,
            groups=",".join(groups),
            checks=len(rows),
            notices=len(result),
            duplicates=len(collected) - len(result),
            duration_ms=duration_ms,
        )
        return report

    def _execute(self, check: Check, group: str, ctx: CheckContext, log: StructuredLog) -> tuple[tuple[Notice, ...], CheckRow]:
        cid = str(check.id)
        started = time.perf_counter()
        try:
            raw = check.evaluate(ctx)
            items = None if raw is None else list(raw)
        except Exception as exc:
            duration_ms = int((time.perf_counter() - started) * 1000)
            log.event("error", "runner", "check_failed", check_id=cid, group=group, error_type=exc.__class__.__name__, error=str(exc))
            return (), CheckRow(cid, group, CheckStatus.ERROR, duration_ms, 0, f"{exc.__class__.__name__}: {exc}")
        duration_ms = int((time.perf_counter() - started) * 1000)

        if items is None:
            log.event("warn", "runner", "check_contract", check_id=cid, reason="evaluate returned None")
            items = []
        notices = tuple(item for item in items if isinstance(item, Notice))
        if len(notices) != len(items):
            log.event("warn", "runner", "check_contract", check_id=cid, reason="dropped non-notice values", dropped=len(items) - len(notices))
        status = CheckStatus.NOTICE if notices else CheckStatus.PASS
        log.event("debug", "runner", "check_done", check_id=cid, group=group, status=status.value, notices=len(notices), duration_ms=duration_ms)
        return notices, CheckRow(cid, group, status, duration_ms, len(notices))


__all__ = ["CheckRow", "CheckRunner", "CheckStatus", "PassReport"]
