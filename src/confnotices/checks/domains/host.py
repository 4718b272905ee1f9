from __future__ import annotations

import ipaddress

from ..model import CheckContext, CheckDef, Notice, error, warning

SESSION_HINT = "If you experience difficulties logging on, either configure your webserver to use {target}, or use another browser."


def is_ip_address(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def _with_escalation(ctx: CheckContext, notice: Notice) -> list[Notice]:
    # authentication pages also get the message on the error channel
    if ctx.is_auth_route:
        return [notice, error(notice.text)]
    return [notice]


def single_hostname(ctx: CheckContext) -> list[Notice]:
    host = ctx.request.hostname
    if not host or "." in host or is_ip_address(host):
        return []
    notice = warning(
        f"You are using <tt>{host}</tt> as host name. Some browsers have problems with sessions on hostnames that do not have a <tt>.tld</tt> in them.",
        SESSION_HINT.format(target="a hostname with a dot in it"),
    )
    return _with_escalation(ctx, notice)


def ip_address(ctx: CheckContext) -> list[Notice]:
    host = ctx.request.hostname
    if not is_ip_address(host):
        return []
    notice = warning(
        f"You are using the <strong>IP address</strong> <tt>{host}</tt> as host name. This is known to cause problems with sessions.",
        SESSION_HINT.format(target="a proper hostname"),
    )
    return _with_escalation(ctx, notice)


def subfolder(ctx: CheckContext) -> list[Notice]:
    if not ctx.request.base_url.strip("/"):
        return []
    return [
        warning(
            "You are running the application in a subfolder, <strong>instead of the webroot</strong>.",
            "It is recommended to serve it from the web root, so that it is in the top level. "
            "If you only want it for part of a website, set up a subdomain like <tt>news.example.org</tt>.",
        )
    ]


def canonical(ctx: CheckContext) -> list[Notice]:
    canonical_url = ctx.runtime.canonical_url.strip()
    current = ctx.request.uri.split("?", 1)[0]
    if not canonical_url or current == canonical_url:
        return []
    return [
        warning(
            f"The <tt>canonical hostname</tt> is set to <tt>{canonical_url}</tt> in <tt>config.yml</tt>, but you are currently "
            "logged in using another hostname. This might cause issues with uploaded files, or links inserted in the content.",
            f"Log in using the proper URL: <tt><a href='{canonical_url}'>{canonical_url}</a></tt>.",
        )
    ]


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("host/single-hostname", single_hostname, ("entry",), "host name without a dot"),
    CheckDef("host/ip-address", ip_address, ("entry",), "raw IP address used as host name"),
    CheckDef("host/subfolder", subfolder, ("entry",), "application served from a subfolder"),
    CheckDef("host/canonical", canonical, ("dashboard",), "request URL differs from the canonical URL"),
)

__all__ = ["CHECKS", "canonical", "ip_address", "is_ip_address", "single_hostname", "subfolder"]
