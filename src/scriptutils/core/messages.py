"""Diagnostic messages with call-site context.

Each argument is printed on its own line. The first line carries the prefix
built from ``MessageConfig.prefix_format``; continuation lines are indented to
the same width:

    2026-10-16 10:04:11.120443 WARNING build.py 42 disk is almost full
                                                   only 3% left
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import NoReturn, TextIO

from .callsite import CallSite, resolve_caller
from .config import UtilsConfig, get_config
from .errors import ScriptError
from .format import Severity, format_lines, format_prefix, split_lines


class Messenger:
    """Writes prefixed diagnostics to a stream.

    ``config=None`` follows the process default from ``get_config()``; ``stream=None``
    writes to whatever ``sys.stderr`` is at the time of the call.
    """

    def __init__(self, config: UtilsConfig | None = None, stream: TextIO | None = None) -> None:
        self._config = config
        self._stream = stream

    @property
    def config(self) -> UtilsConfig:
        return self._config if self._config is not None else get_config()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def emit(self, severity: Severity, enabled: bool, lines: tuple[str, ...], site: CallSite | None = None) -> bool:
        cfg = self.config.messages
        if not (cfg.msg_enable and enabled):
            return False
        where = site or resolve_caller()
        if cfg.log_json:
            payload = {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": severity.value,
                "file": where.filename,
                "line": where.lineno,
                "func": where.function,
                "message": "\n".join(split_lines(lines)),
            }
            self.stream.write(json.dumps(payload, sort_keys=True) + "\n")
        else:
            prefix = format_prefix(severity, where, cfg.prefix_format)
            for line in format_lines(prefix, lines):
                self.stream.write(line + "\n")
        self.stream.flush()
        return True

    def debug(self, *lines: str, site: CallSite | None = None) -> None:
        self.emit(Severity.DEBUG, self.config.messages.debug_enable, lines, site)

    def info(self, *lines: str, site: CallSite | None = None) -> None:
        self.emit(Severity.INFO, self.config.messages.info_enable, lines, site)

    def warn(self, *lines: str, site: CallSite | None = None) -> None:
        self.emit(Severity.WARNING, self.config.messages.warn_enable, lines, site)

    def err_no_exit(self, *lines: str, site: CallSite | None = None) -> None:
        self.emit(Severity.ERROR, self.config.messages.err_no_exit_enable, lines, site)

    def err(self, *lines: str, site: CallSite | None = None, kind: str = "fatal") -> NoReturn:
        """Report an error and abort.

        Raises ``ScriptError`` carrying ``err_exit_code``. Only a script entered through
        ``scriptutils.app.run_main`` or ``main_guard`` exits with that code; without
        them the exception is uncaught and Python exits with status 1 and a traceback.
        """
        cfg = self.config.messages
        self.emit(Severity.ERROR, cfg.err_enable, lines, site)
        raise ScriptError("\n".join(split_lines(lines)), cfg.err_exit_code, kind=kind, reported=True)


_DEFAULT = Messenger()


def default_messenger() -> Messenger:
    return _DEFAULT


def debug(*lines: str, site: CallSite | None = None) -> None:
    _DEFAULT.debug(*lines, site=site)


def info(*lines: str, site: CallSite | None = None) -> None:
    _DEFAULT.info(*lines, site=site)


def warn(*lines: str, site: CallSite | None = None) -> None:
    _DEFAULT.warn(*lines, site=site)


def err_no_exit(*lines: str, site: CallSite | None = None) -> None:
    _DEFAULT.err_no_exit(*lines, site=site)


def err(*lines: str, site: CallSite | None = None) -> NoReturn:
    _DEFAULT.err(*lines, site=site)


__all__ = [
    "Messenger",
    "debug",
    "default_messenger",
    "err",
    "err_no_exit",
    "info",
    "warn",
]
