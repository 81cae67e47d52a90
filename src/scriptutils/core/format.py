"""Message prefix templates.

Recognized fields:

    %date     current date: %Y-%m-%d
    %datetime "%date %time"
    %file     the caller file name
    %filebase the file base name
    %func     the caller function name
    %line     the caller line number
    %time     current time: %H:%M:%S.<microseconds>
    %type     message type: DEBUG, INFO, WARNING, ERROR

Any other ``%word`` is copied through unchanged.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable
from datetime import datetime

from .callsite import CallSite

# Longer names first so %datetime and %filebase win over %date and %file.
_FIELD_RE = re.compile(r"%(datetime|date|filebase|file|func|line|time|type)")


class Severity(enum.Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def format_prefix(severity: Severity, site: CallSite, template: str, now: datetime | None = None) -> str:
    moment = now if now is not None else datetime.now()
    date = moment.strftime("%Y-%m-%d")
    time = moment.strftime("%H:%M:%S.%f")
    values = {
        "date": date,
        "time": time,
        "datetime": f"{date} {time}",
        "file": site.filename,
        "filebase": site.basename,
        "func": site.function,
        "line": str(site.lineno),
        "type": severity.value,
    }
    return _FIELD_RE.sub(lambda match: values[match.group(1)], template)


def split_lines(lines: Iterable[str]) -> list[str]:
    out: list[str] = []
    for line in lines:
        out.extend(str(line).split("\n"))
    return out


def format_lines(prefix: str, lines: Iterable[str]) -> list[str]:
    """Prefix the first line; indent the rest by the prefix width."""
    indent = " " * len(prefix)
    return [(prefix if index == 0 else indent) + line for index, line in enumerate(split_lines(lines))]


__all__ = ["Severity", "format_lines", "format_prefix", "split_lines"]
