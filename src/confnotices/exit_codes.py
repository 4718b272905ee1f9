from __future__ import annotations

OK = 0
ERR_USAGE = 2
ERR_CONFIG = 3
ERR_INTERNAL = 99

__all__ = ["ERR_CONFIG", "ERR_INTERNAL", "ERR_USAGE", "OK"]
