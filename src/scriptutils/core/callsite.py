"""Locate the user code that called into scriptutils."""

from __future__ import annotations

import inspect
import os
from collections.abc import Iterable
from dataclasses import dataclass

LIBRARY_PACKAGE = "scriptutils"


@dataclass(frozen=True)
class CallSite:
    filename: str
    lineno: int
    function: str
    code: str | None = None

    @property
    def basename(self) -> str:
        return os.path.basename(self.filename)

    @classmethod
    def parse(cls, raw: str) -> CallSite:
        """Parse ``FILE:LINE`` or ``FILE:LINE:FUNC`` as given on the command line."""
        parts = raw.rsplit(":", 2)
        if len(parts) == 3 and not parts[1].isdigit() and parts[2].isdigit():
            parts = [f"{parts[0]}:{parts[1]}", parts[2]]
        if len(parts) < 2 or not parts[1].isdigit():
            raise ValueError(f"invalid call site: {raw!r} (expected FILE:LINE[:FUNC])")
        function = parts[2] if len(parts) == 3 else "main"
        return cls(filename=parts[0], lineno=int(parts[1]), function=function)


def _is_library_module(module: str, skip_modules: Iterable[str]) -> bool:
    for prefix in (LIBRARY_PACKAGE, *skip_modules):
        if module == prefix or module.startswith(prefix + "."):
            return True
    return False


def resolve_caller(skip_modules: Iterable[str] = ()) -> CallSite:
    """Return the innermost frame that does not belong to scriptutils.

    Modules listed in ``skip_modules`` are treated as library code as well, which
    lets a project hide its own logging wrappers.
    """
    skipped = tuple(skip_modules)
    stack = inspect.stack(context=1)
    try:
        chosen = stack[-1]
        for info in stack[1:]:
            module = str(info.frame.f_globals.get("__name__", ""))
            if not _is_library_module(module, skipped):
                chosen = info
                break
        code = chosen.code_context[0].strip() if chosen.code_context else None
        return CallSite(filename=chosen.filename, lineno=chosen.lineno, function=chosen.function, code=code)
    finally:
        del stack


__all__ = ["CallSite", "LIBRARY_PACKAGE", "resolve_caller"]
