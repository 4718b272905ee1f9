from __future__ import annotations

from typing import Mapping

from ..model import CheckContext, CheckDef, Notice, info, warning

MAIL_CAPABILITY = "files:config"


def mail(ctx: CheckContext) -> list[Notice]:
    """Nudge users who may edit configuration to set up a mail transport."""
    if ctx.config.get("general/mailoptions"):
        return []
    if not ctx.request.has_previous_session:
        return []
    users = ctx.probes.users
    user = users.current_user()
    if not user or not users.is_allowed(user, MAIL_CAPABILITY):
        return []
    return [
        warning(
            "The <strong>mail configuration parameters</strong> have not been set up. This may interfere with password resets, "
            "and extension functionality. Please set up the <tt>mailoptions</tt> in <tt>config.yml</tt>."
        )
    ]


def maintenance(ctx: CheckContext) -> list[Notice]:
    if not ctx.config.get("general/maintenance_mode", False):
        return []
    return [
        info(
            "<strong>Maintenance mode</strong> is enabled. This means that non-authenticated users will not be able to see the website.",
            "To make the site available to the general public again, set <tt>maintenance_mode: false</tt> in your <tt>config.yml</tt> file.",
        )
    ]


def thumbnails(ctx: CheckContext) -> list[Notice]:
    raw = ctx.config.get("general/thumbnails", {})
    thumbs = raw if isinstance(raw, Mapping) else {}
    values = [str(thumbs.get(key) or "") for key in ("notfound_image", "error_image")]
    if "://" in "".join(values):
        return []
    return [
        warning(
            "Your configuration settings for <code>thumbnails/notfound_image</code> or <code>thumbnails/error_image</code> "
            "contain a value that needs to be updated.",
            "Update the value with a namespace, for example: <code>assets://img/default_notfound.png</code>.",
        )
    ]


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("config/mail", mail, ("dashboard",), "mail transport configured"),
    CheckDef("config/maintenance", maintenance, ("dashboard",), "maintenance mode enabled"),
    CheckDef("config/thumbnails", thumbnails, ("dashboard",), "thumbnail image paths use a namespace"),
)

__all__ = ["CHECKS", "MAIL_CAPABILITY", "mail", "maintenance", "thumbnails"]
