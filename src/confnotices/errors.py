from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_CONFIG, ERR_INTERNAL


@dataclass
class NoticesError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class RegistryError(NoticesError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_INTERNAL, "registry_error")


class DuplicateCheckError(RegistryError):
    def __init__(self, check_id: str) -> None:
        super().__init__(f"duplicate check id `{check_id}`")
        self.check_id = check_id


class ConfigError(NoticesError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_CONFIG, "config_error")


__all__ = ["ConfigError", "DuplicateCheckError", "NoticesError", "RegistryError"]
