from __future__ import annotations

import re

_DIGITS = re.compile(r"[0-9]+")


def convert_seconds_to_hhmmss(value: int | str) -> tuple[int, str]:
    """Convert a count of seconds to ``HH:MM:SS``.

    Returns ``(status, text)``. Hours are not wrapped at 24, so 123456 gives
    ``34:17:36``. Anything that is not a non-negative integer gives status 1 and
    the input echoed back unchanged.
    """
    if isinstance(value, bool):
        return 1, str(value)
    if isinstance(value, int):
        total = value
    elif isinstance(value, str) and _DIGITS.fullmatch(value):
        total = int(value)
    else:
        return 1, str(value)
    if total < 0:
        return 1, str(value)
    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    return 0, f"{hours:02d}:{minutes:02d}:{seconds:02d}"


__all__ = ["convert_seconds_to_hhmmss"]
