from __future__ import annotations

from ..model import CheckContext, CheckDef, Notice, info, warning
from .host import is_ip_address

DEFAULT_LOCAL_PARTIALS: tuple[str, ...] = (
    ".dev",
    "dev.",
    "devel.",
    "development.",
    "test.",
    ".test",
    "new.",
    ".new",
    ".local",
    "local.",
)


def _as_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(item) for item in value]
    return []


def local_partials(ctx: CheckContext) -> tuple[str, ...]:
    merged = [
        *_as_list(ctx.config.get("general/configuration_notices/local_domains", [])),
        *_as_list(ctx.config.get("general/debug_local_domains", [])),
        *ctx.settings.local_domains,
        *DEFAULT_LOCAL_PARTIALS,
    ]
    return tuple(dict.fromkeys(p.strip() for p in merged if p.strip()))


def development_version(ctx: CheckContext) -> list[Notice]:
    if ctx.runtime.stable_release:
        return []
    return [
        info(
            "This is a <strong>development version</strong>, so it might contain bugs and unfinished features. Use at your own risk!",
            "For 'production' websites, we advise you to stick with the official stable releases.",
        )
    ]


def debug_live(ctx: CheckContext) -> list[Notice]:
    if not ctx.runtime.debug:
        return []
    host = ctx.request.hostname
    # an IP address is assumed to be a development setup
    if not host or is_ip_address(host):
        return []
    if any(partial in host for partial in local_partials(ctx)):
        return []
    return [
        warning(
            "It seems like this website is running on a <strong>non-development environment</strong>, while 'debug' is enabled. "
            "Make sure debug is disabled in production environments. If you don't do this, it will result in an extremely large "
            "<tt>app/cache</tt> folder and a measurable reduced performance across all pages.",
            "If you wish to hide this message, add a key to your <tt>config.yml</tt> with a (partial) domain name in it, "
            "that should be seen as a development environment: <tt>debug_local_domains: [ '.foo' ]</tt>.",
        )
    ]


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("runtime/development-version", development_version, ("dashboard",), "unstable release in use"),
    CheckDef("runtime/debug-live", debug_live, ("dashboard",), "debug enabled outside a development host"),
)

__all__ = ["CHECKS", "DEFAULT_LOCAL_PARTIALS", "debug_live", "development_version", "local_partials"]
