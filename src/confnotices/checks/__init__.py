"""Check engine public API.

- Check types, context and collaborator protocols live in ``confnotices.checks.model``.
- Grouping and ordering live in ``confnotices.checks.registry``.
- Execution lives in ``confnotices.checks.runner``.
"""

from __future__ import annotations

from .model import ALWAYS, CheckContext, CheckDef, Notice, Severity
from .registry import CheckRegistry

__all__ = ["ALWAYS", "CheckContext", "CheckDef", "CheckRegistry", "Notice", "Severity"]
