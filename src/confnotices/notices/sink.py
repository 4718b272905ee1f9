from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from ..checks.model import Notice, Severity
from ..logging import StructuredLog


@runtime_checkable
class Presenter(Protocol):
    def configuration(self, notice: Notice) -> None: ...

    def error(self, notice: Notice) -> None: ...


class NoticeSink:
    """Collects one pass of notices, drops exact duplicates, forwards the rest.

    First occurrence wins and keeps its position. A sink is not reused across
    passes.
    """

    def __init__(self, presenter: Presenter | None = None, log: StructuredLog | None = None) -> None:
        self._presenter = presenter
        self._log = log or StructuredLog()
        self._seen: set[Notice] = set()
        self._accepted: list[Notice] = []

    @property
    def notices(self) -> tuple[Notice, ...]:
        return tuple(self._accepted)

    def submit(self, notices: Iterable[Notice]) -> tuple[Notice, ...]:
        for notice in notices:
            if notice in self._seen:
                continue
            self._seen.add(notice)
            self._accepted.append(notice)
            self._forward(notice)
        return self.notices

    def _forward(self, notice: Notice) -> None:
        if self._presenter is None:
            return
        channel = "error" if notice.severity >= Severity.ERROR else "configuration"
        try:
            getattr(self._presenter, channel)(notice)
        except Exception as exc:
            # notice stays accepted
            self._log.event("error", "sink", "presenter_failed", channel=channel, error_type=exc.__class__.__name__, error=str(exc))


class RecordingPresenter:
    """Presenter that keeps what it was handed, split by channel."""

    def __init__(self) -> None:
        self.configuration_notices: list[Notice] = []
        self.error_notices: list[Notice] = []

    def configuration(self, notice: Notice) -> None:
        self.configuration_notices.append(notice)

    def error(self, notice: Notice) -> None:
        self.error_notices.append(notice)


__all__ = ["NoticeSink", "Presenter", "RecordingPresenter"]
