"""Ordered check registry grouped by route-group tags."""

from __future__ import annotations

from typing import Iterable, Iterator

from ..errors import DuplicateCheckError
from .model import ALWAYS, Check, validate_group


class CheckRegistry:
    def __init__(self) -> None:
        self._checks: list[Check] = []
        self._groups: dict[str, tuple[str, ...]] = {}

    def register(self, check: Check, groups: Iterable[str] | None = None) -> Check:
        cid = str(check.id)
        if cid in self._groups:
            raise DuplicateCheckError(cid)
        raw = tuple(groups) if groups is not None else tuple(getattr(check, "groups", ()) or ())
        tags = tuple(dict.fromkeys(validate_group(g) for g in raw)) or (ALWAYS,)
        self._checks.append(check)
        self._groups[cid] = tags
        return check

    def register_all(self, checks: Iterable[Check]) -> None:
        for check in checks:
            self.register(check)

    def checks_for(self, group: str) -> tuple[Check, ...]:
        tag = str(group).strip()
        return tuple(
            check for check in self._checks if tag in self._groups[str(check.id)] or ALWAYS in self._groups[str(check.id)]
        )

    def groups_of(self, check_id: str) -> tuple[str, ...]:
        return self._groups[str(check_id)]

    def ids(self) -> tuple[str, ...]:
        return tuple(str(check.id) for check in self._checks)

    def __contains__(self, check_id: object) -> bool:
        return str(check_id) in self._groups

    def __iter__(self) -> Iterator[Check]:
        return iter(tuple(self._checks))

    def __len__(self) -> int:
        return len(self._checks)


__all__ = ["CheckRegistry"]
