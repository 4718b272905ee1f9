__version__ = "0.1.0"

__all__ = [
    "__version__",
    "adapters",
    "checks",
    "cli",
    "config",
    "errors",
    "exit_codes",
    "listener",
    "logging",
    "notices",
    "settings",
]
