from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

_ALLOWED_MARKERS = {"unit", "integration"}

settings.register_profile("confnotices", deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile("confnotices")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CONFNOTICES_SETTINGS", raising=False)
    monkeypatch.delenv("CONFNOTICES_LOG_JSON", raising=False)
