from __future__ import annotations

from ..model import CheckContext, CheckDef, Notice, warning

CHANGELOG = "changelog"
SYSTEMLOG = "systemlog"


def _over_threshold(ctx: CheckContext, kind: str, title: str, page: str) -> list[Notice]:
    threshold = ctx.log_threshold()
    count = int(ctx.probes.rows.count(kind))
    if count <= threshold:
        return []
    return [
        warning(
            f"The <strong>{title}</strong> is enabled, and there are more than {threshold} rows in the table.",
            f"Be sure to clean it up periodically, using a Cron job or on the {page} page.",
        )
    ]


def changelog(ctx: CheckContext) -> list[Notice]:
    if not ctx.config.get("general/changelog/enabled", False):
        return []
    return _over_threshold(ctx, CHANGELOG, "changelog", "Changelog")


def systemlog(ctx: CheckContext) -> list[Notice]:
    return _over_threshold(ctx, SYSTEMLOG, "systemlog", "Systemlog")


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("logs/changelog", changelog, ("dashboard",), "change log row count under threshold"),
    CheckDef("logs/systemlog", systemlog, ("dashboard",), "system log row count under threshold"),
)

__all__ = ["CHANGELOG", "CHECKS", "SYSTEMLOG", "changelog", "systemlog"]
