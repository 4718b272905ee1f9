from __future__ import annotations

from confnotices.checks.model import RuntimeInfo, Severity
from confnotices.listener import RequestEvent, RequestListener, build_runner
from confnotices.notices.sink import RecordingPresenter
from tests.helpers import Calls, SpyConfig, healthy_config, make_probes, make_runner, request


def test_sub_requests_are_ignored() -> None:
    calls = Calls()
    listener = RequestListener(make_runner(calls))
    assert listener.on_request(RequestEvent("login", request("localhost"), is_main_request=False)) == ()
    assert len(calls) == 0


def test_unclassified_route_skips_runtime_lookup() -> None:
    looked_up: list[bool] = []

    def runtime() -> RuntimeInfo:
        looked_up.append(True)
        return RuntimeInfo()

    listener = RequestListener(make_runner(), runtime)
    assert listener.on_request(RequestEvent("preferences", request())) == ()
    assert looked_up == []


def test_main_request_runs_pass_with_fresh_runtime() -> None:
    listener = RequestListener(make_runner(), lambda: RuntimeInfo(stable_release=False))
    notices = listener.on_request(RequestEvent("dashboard", request()))
    assert [n.severity for n in notices] == [Severity.INFO]


def test_build_runner_uses_default_checks() -> None:
    calls = Calls()
    presenter = RecordingPresenter()
    runner = build_runner(
        config=SpyConfig(calls, healthy_config()),
        probes=make_probes(calls),
        presenter=presenter,
    )
    assert len(runner.registry) == 15
    notices = RequestListener(runner).on_request(RequestEvent("login", request("192.168.1.5")))
    assert [n.severity for n in notices] == [Severity.WARNING, Severity.ERROR]
    assert presenter.error_notices == [notices[1]]
