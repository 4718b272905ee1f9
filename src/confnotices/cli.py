from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .adapters import ImportExtensionProbe, LocalFilesystemProbe, StaticExtensionProbe, StaticRowCounter, StaticUsers
from .checks.domains import register_defaults
from .checks.model import Probes, RequestInfo, RuntimeInfo
from .checks.registry import CheckRegistry
from .checks.runner import PassReport
from .config import MappingConfig
from .errors import NoticesError
from .exit_codes import ERR_INTERNAL, ERR_USAGE, OK
from .listener import build_runner
from .logging import StructuredLog
from .settings import NoticesSettings, load_settings


def dumps_json(payload: object, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(payload, indent=2, sort_keys=True)
    return json.dumps(payload, sort_keys=True)


def render_error(*, as_json: bool, message: str, code: int) -> str:
    if as_json:
        return dumps_json(
            {
                "schema_version": 1,
                "tool": "confnotices",
                "status": "error",
                "errors": [{"code": code, "message": message}],
            }
        )
    return message


def _pairs(values: Sequence[str], flag: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip() or not value.strip():
            raise NoticesError(f"{flag} expects KEY=VALUE, got `{raw}`", ERR_USAGE, "usage_error")
        out[key.strip()] = value.strip()
    return out


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="confnotices", description="run configuration notice checks for one request")
    p.add_argument("--version", action="version", version=f"confnotices {__version__}")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--settings", help="settings YAML path (default: $CONFNOTICES_SETTINGS)")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="log debug diagnostics to stderr")
    vg.add_argument("--quiet", action="store_true", help="only log errors to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    run_p = sub.add_parser("run", help="run one notices pass")
    run_p.add_argument("--route", required=True, help="route name of the request")
    run_p.add_argument("--host", required=True, help="HTTP host of the request")
    run_p.add_argument("--uri", default="", help="full request URI")
    run_p.add_argument("--base-url", default="", help="base URL when served from a subfolder")
    run_p.add_argument("--no-session", action="store_true", help="request carries no previous session")
    run_p.add_argument("--app-config", help="application config YAML read through the config accessor")
    run_p.add_argument("--mount", action="append", default=[], metavar="AREA=DIR", help="filesystem area to probe")
    run_p.add_argument("--user", help="current user identity")
    run_p.add_argument("--capability", action="append", default=[], help="capability granted to --user")
    run_p.add_argument("--extension", action="append", default=None, metavar="CAP", help="available capability (default: import probe)")
    run_p.add_argument("--row", action="append", default=[], metavar="KIND=N", help="log row count")
    run_p.add_argument("--debug", action="store_true", help="application runs with debug enabled")
    run_p.add_argument("--unstable", action="store_true", help="application version is not a stable release")
    run_p.add_argument("--canonical-url", default="", help="configured canonical URL")

    sub.add_parser("list", help="list registered checks and their groups")
    return p


def _log_for(ns: argparse.Namespace, settings: NoticesSettings) -> StructuredLog:
    level = "debug" if ns.verbose else ("error" if ns.quiet else settings.log_level)
    return StructuredLog(json_output=settings.log_json, min_level=level)


def _run_pass(ns: argparse.Namespace, settings: NoticesSettings) -> PassReport:
    mounts = _pairs(ns.mount, "--mount")
    rows: dict[str, int] = {}
    for kind, value in _pairs(ns.row, "--row").items():
        if not value.isdigit():
            raise NoticesError(f"--row expects a non-negative integer count, got `{kind}={value}`", ERR_USAGE, "usage_error")
        rows[kind] = int(value)
    config = MappingConfig.from_yaml(ns.app_config) if ns.app_config else MappingConfig()
    extensions = StaticExtensionProbe(ns.extension) if ns.extension is not None else ImportExtensionProbe()
    probes = Probes(
        fs=LocalFilesystemProbe({area: Path(root) for area, root in mounts.items()}),
        rows=StaticRowCounter(rows),
        users=StaticUsers(ns.user, ns.capability),
        extensions=extensions,
    )
    runner = build_runner(
        config=config,
        probes=probes,
        settings=settings,
        runtime=RuntimeInfo(debug=ns.debug, stable_release=not ns.unstable, canonical_url=ns.canonical_url),
        log=_log_for(ns, settings),
    )
    request = RequestInfo(host=ns.host, uri=ns.uri, base_url=ns.base_url, has_previous_session=not ns.no_session)
    return runner.run_pass(ns.route, request)


def _render_report(report: PassReport) -> str:
    if report.skipped:
        return f"route `{report.route}` is not checked"
    if not report.notices:
        return f"route `{report.route}`: no notices ({report.summary['total']} checks)"
    lines = [f"route `{report.route}`: {len(report.notices)} notice(s)"]
    for notice in report.notices:
        lines.append(f"[{notice.severity.label}] {notice.message}")
        if notice.detail:
            lines.append(f"    {notice.detail}")
    errored = [row.check_id for row in report.rows if row.status.value == "error"]
    if errored:
        lines.append(f"internal check errors: {', '.join(errored)}")
    return "\n".join(lines)


def _list_checks() -> dict[str, object]:
    registry = register_defaults(CheckRegistry())
    return {
        "schema_version": 1,
        "tool": "confnotices",
        "kind": "check-list",
        "checks": [
            {"id": str(check.id), "groups": list(registry.groups_of(str(check.id))), "description": getattr(check, "description", "")}
            for check in registry
        ],
    }


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    try:
        settings = load_settings(ns.settings)
        if ns.cmd == "list":
            payload = _list_checks()
            if ns.json:
                print(dumps_json(payload))
            else:
                for row in payload["checks"]:  # type: ignore[union-attr]
                    print(f"{row['id']:<32} {','.join(row['groups'])}")
            return OK
        report = _run_pass(ns, settings)
    except NoticesError as exc:
        print(render_error(as_json=ns.json, message=exc.message, code=exc.code), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=ns.json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL
    print(dumps_json(report.as_payload()) if ns.json else _render_report(report))
    return OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
