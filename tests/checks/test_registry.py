from __future__ import annotations

import pytest

from confnotices.checks.domains import DEFAULT_ORDER, default_checks, register_defaults
from confnotices.checks.model import ALWAYS, CheckContext, CheckDef, Notice
from confnotices.checks.registry import CheckRegistry
from confnotices.errors import DuplicateCheckError, RegistryError


def _noop(_ctx: CheckContext) -> list[Notice]:
    return []


def test_register_preserves_insertion_order_per_group() -> None:
    registry = CheckRegistry()
    registry.register(CheckDef("a/first", _noop, ("entry",)))
    registry.register(CheckDef("a/second", _noop, ("dashboard",)))
    registry.register(CheckDef("a/third", _noop, ("entry", "dashboard")))
    assert [c.id for c in registry.checks_for("entry")] == ["a/first", "a/third"]
    assert [c.id for c in registry.checks_for("dashboard")] == ["a/second", "a/third"]
    assert registry.ids() == ("a/first", "a/second", "a/third")


def test_always_tagged_checks_join_every_group() -> None:
    registry = CheckRegistry()
    registry.register(CheckDef("a/entry", _noop, ("entry",)))
    registry.register(CheckDef("a/global", _noop))
    assert registry.groups_of("a/global") == (ALWAYS,)
    assert [c.id for c in registry.checks_for("entry")] == ["a/entry", "a/global"]
    assert [c.id for c in registry.checks_for("anything")] == ["a/global"]


def test_explicit_groups_override_check_groups() -> None:
    registry = CheckRegistry()
    registry.register(CheckDef("a/one", _noop, ("entry",)), groups=["dashboard", "dashboard"])
    assert registry.groups_of("a/one") == ("dashboard",)
    assert registry.checks_for("entry") == ()


def test_duplicate_id_fails_at_registration() -> None:
    registry = CheckRegistry()
    registry.register(CheckDef("a/one", _noop, ("entry",)))
    with pytest.raises(DuplicateCheckError) as info:
        registry.register(CheckDef("a/one", _noop, ("dashboard",)))
    assert info.value.check_id == "a/one"
    assert isinstance(info.value, RegistryError)
    assert len(registry) == 1
    assert registry.groups_of("a/one") == ("entry",)


def test_invalid_group_tag_is_rejected() -> None:
    registry = CheckRegistry()
    with pytest.raises(ValueError):
        registry.register(CheckDef("a/one", _noop), groups=["Not A Tag"])
    assert "a/one" not in registry


def test_invalid_check_id_is_rejected_at_definition() -> None:
    with pytest.raises(ValueError):
        CheckDef("NoSlash", _noop)


def test_defaults_follow_declared_order() -> None:
    checks = default_checks()
    assert tuple(c.check_id for c in checks) == DEFAULT_ORDER
    registry = register_defaults(CheckRegistry())
    assert registry.ids() == DEFAULT_ORDER
    entry = [c.id for c in registry.checks_for("entry")]
    assert entry == ["host/single-hostname", "host/ip-address", "host/subfolder", "fs/writable-folders"]


def test_registering_defaults_twice_fails_fast() -> None:
    registry = register_defaults(CheckRegistry())
    with pytest.raises(DuplicateCheckError):
        register_defaults(registry)
