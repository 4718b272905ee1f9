"""Request-lifecycle integration.

`RequestListener.on_request` is meant to be subscribed to a web framework's
request event; it runs one pass for main requests and leaves the response
alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .checks.domains import register_defaults
from .checks.model import ConfigAccessor, Notice, Probes, RequestInfo, RuntimeInfo
from .checks.registry import CheckRegistry
from .checks.runner import CheckRunner
from .logging import StructuredLog
from .notices.sink import Presenter
from .settings import NoticesSettings


@dataclass(frozen=True)
class RequestEvent:
    route: str
    request: RequestInfo
    is_main_request: bool = True


def build_runner(
    *,
    config: ConfigAccessor,
    probes: Probes,
    settings: NoticesSettings | None = None,
    runtime: RuntimeInfo | None = None,
    presenter: Presenter | None = None,
    registry: CheckRegistry | None = None,
    log: StructuredLog | None = None,
) -> CheckRunner:
    resolved = settings or NoticesSettings()
    return CheckRunner(
        registry if registry is not None else register_defaults(CheckRegistry()),
        config=config,
        probes=probes,
        runtime=runtime,
        settings=resolved,
        presenter=presenter,
        log=log,
    )


class RequestListener:
    def __init__(self, runner: CheckRunner, runtime: Callable[[], RuntimeInfo] | None = None) -> None:
        self._runner = runner
        self._runtime = runtime

    def on_request(self, event: RequestEvent) -> tuple[Notice, ...]:
        if not event.is_main_request or not self._runner.classifier.groups_for(event.route):
            return ()
        runtime = self._runtime() if self._runtime is not None else None
        return self._runner.run_pass(event.route, event.request, runtime=runtime).notices


__all__ = ["RequestEvent", "RequestListener", "build_runner"]
