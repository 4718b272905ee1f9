"""Structured internal diagnostics for notice passes.

Events go to stderr and are never shown to the end user.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TextIO

LEVELS: dict[str, int] = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def log_event(
    level: str,
    component: str,
    action: str,
    *,
    pass_id: str = "",
    json_output: bool = False,
    stream: TextIO | None = None,
    **fields: object,
) -> None:
    out = stream if stream is not None else sys.stderr
    payload: dict[str, object] = {
        "ts": utc_now_iso(),
        "level": level,
        "pass_id": pass_id,
        "component": component,
        "action": action,
        **fields,
    }
    if json_output:
        out.write(json.dumps(payload, sort_keys=True, default=str) + "\n")
        return
    core = f"ts={payload['ts']} level={level} pass_id={pass_id} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    out.write((core if not extras else f"{core} {extras}") + "\n")


@dataclass(frozen=True)
class StructuredLog:
    pass_id: str = ""
    json_output: bool = False
    min_level: str = "info"
    stream: TextIO | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        level = str(self.min_level).strip().lower()
        if level not in LEVELS:
            raise ValueError(f"unknown log level `{self.min_level}`: expected one of {sorted(LEVELS)}")
        object.__setattr__(self, "min_level", level)

    def enabled(self, level: str) -> bool:
        return LEVELS.get(level, LEVELS["error"]) >= LEVELS[self.min_level]

    def bind(self, pass_id: str) -> StructuredLog:
        return StructuredLog(pass_id=pass_id, json_output=self.json_output, min_level=self.min_level, stream=self.stream)

    def event(self, level: str, component: str, action: str, **fields: object) -> None:
        if not self.enabled(level):
            return
        log_event(
            level,
            component,
            action,
            pass_id=self.pass_id,
            json_output=self.json_output,
            stream=self.stream,
            **fields,
        )


__all__ = ["LEVELS", "StructuredLog", "log_event", "utc_now_iso"]
