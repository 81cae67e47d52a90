"""Process exit codes used by scriptutils."""

from __future__ import annotations

OK = 0
ERR_DEFAULT = 1
ERR_USAGE = 2
ERR_CONFIG = 3
ERR_VALIDATION = 4
ERR_SPAWN = 127
ERR_INTERNAL = 99
