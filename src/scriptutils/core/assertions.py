"""Assertions that abort through ``err`` with the caller's location."""

from __future__ import annotations

import subprocess
from collections.abc import Callable

from .callsite import CallSite, resolve_caller
from .config import UtilsConfig, get_config
from .messages import Messenger


def assert_that(
    condition: bool | Callable[[], bool],
    message: str | None = None,
    *,
    messenger: Messenger | None = None,
    site: CallSite | None = None,
) -> None:
    """Abort with ``Assertion failed: <text>.`` when ``condition`` is false.

    ``condition`` may be a zero-argument callable. Without ``message`` the text is
    the caller's source line.
    """
    where = site or resolve_caller()
    outcome = condition() if callable(condition) else condition
    if outcome:
        return
    text = message or where.code or "<expression>"
    (messenger or Messenger()).err(f"Assertion failed: {text}.", site=where, kind="assertion")


def assert_shell(
    expression: str,
    *,
    config: UtilsConfig | None = None,
    messenger: Messenger | None = None,
    site: CallSite | None = None,
) -> None:
    """Evaluate a shell test such as ``[ -f build.log ]`` and abort if it fails."""
    where = site or resolve_caller()
    shell = (config or get_config()).exec.shell
    proc = subprocess.run(expression, shell=True, executable=shell, check=False)
    if proc.returncode != 0:
        (messenger or Messenger(config)).err(f"Assertion failed: {expression}.", site=where, kind="assertion")


__all__ = ["assert_shell", "assert_that"]
