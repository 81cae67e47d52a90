"""Top-level handler that turns ``ScriptError`` into a process exit status."""

from __future__ import annotations

import functools
import sys
from collections.abc import Callable
from typing import NoReturn

from .core.errors import ScriptError
from .core.exit_codes import OK


def render_error(exc: ScriptError) -> str:
    return f"ERROR: {exc.message}"


def call_guarded(main: Callable[[], int | None]) -> int:
    """Run ``main`` and return the exit status it stands for.

    A ``ScriptError`` becomes its ``code``; it is printed to stderr unless ``err``
    already reported it.
    """
    try:
        rc = main()
    except ScriptError as exc:
        if not exc.reported:
            print(render_error(exc), file=sys.stderr)
        return exc.code
    return OK if rc is None else int(rc)


def run_main(main: Callable[[], int | None]) -> NoReturn:
    sys.exit(call_guarded(main))


def main_guard(func: Callable[..., int | None]) -> Callable[..., int]:
    """Decorator form of ``call_guarded`` for script entry points."""

    @functools.wraps(func)
    def wrapper(*args: object, **kwargs: object) -> int:
        return call_guarded(lambda: func(*args, **kwargs))

    return wrapper


__all__ = ["call_guarded", "main_guard", "render_error", "run_main"]
