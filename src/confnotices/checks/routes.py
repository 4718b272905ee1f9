from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ..settings import DEFAULT_AUTH_ROUTES, DEFAULT_GROUP_ORDER, DEFAULT_ROUTE_GROUPS, NoticesSettings
from .model import validate_group


@dataclass(frozen=True)
class RouteClassifier:
    route_groups: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_ROUTE_GROUPS))
    group_order: tuple[str, ...] = DEFAULT_GROUP_ORDER
    auth_routes: frozenset[str] = DEFAULT_AUTH_ROUTES

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "route_groups",
            {str(route).strip(): tuple(validate_group(g) for g in groups) for route, groups in self.route_groups.items()},
        )
        object.__setattr__(self, "group_order", tuple(validate_group(g) for g in self.group_order))
        object.__setattr__(self, "auth_routes", frozenset(str(r).strip() for r in self.auth_routes))

    @classmethod
    def from_settings(cls, settings: NoticesSettings) -> RouteClassifier:
        return cls(route_groups=settings.route_groups, group_order=settings.group_order, auth_routes=settings.auth_routes)

    def groups_for(self, route: str | None) -> tuple[str, ...]:
        groups = set(self.route_groups.get(str(route or "").strip(), ()))
        if not groups:
            return ()
        ordered = [g for g in self.group_order if g in groups]
        # groups missing from the fixed order run last, alphabetically
        ordered.extend(sorted(groups.difference(self.group_order)))
        return tuple(ordered)

    def is_auth_route(self, route: str | None) -> bool:
        return str(route or "").strip() in self.auth_routes


__all__ = ["RouteClassifier"]
