"""Run commands through the shell with reporting and an exit-on-error policy.

Arguments are joined back into a single shell line. Arguments containing
whitespace are double-quoted; nothing else is escaped, so pipes and redirection
can be passed as their own arguments and stay live:

    execute("echo", "foo bar", "|", "sed", "-e", "s/bar/spam/")
    execute("echo", "data", ">", "/tmp/out.txt")

Only pass trusted input.
"""

from __future__ import annotations

import os
import re
import shutil
import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import TextIO

from .callsite import CallSite, resolve_caller
from .config import ExecPolicy, UtilsConfig, get_config
from .exit_codes import ERR_SPAWN, ERR_USAGE
from .messages import Messenger
from .usage import ResourceUsage, wait_measured

_WHITESPACE = re.compile(r"\s")
_TYPE_QUERY_SHELLS = {"bash"}


@dataclass(frozen=True)
class CommandResult:
    code: int
    command: str
    duration_ms: int
    usage: ResourceUsage | None = None

    @property
    def ok(self) -> bool:
        return self.code == 0


def build_command_line(argv: Sequence[str]) -> str:
    return " ".join(f'"{arg}"' if (not arg or _WHITESPACE.search(arg)) else arg for arg in argv)


def is_builtin(program: str, shell: str | None = None) -> bool:
    """True when the shell runs ``program`` itself rather than a file, e.g. ``cd`` or ``exit``.

    Under bash this asks ``type -t``, so ``echo`` and ``true`` count as built-ins even
    though copies exist on PATH. Other shells fall back to a PATH lookup.
    """
    if shell and os.path.basename(shell) in _TYPE_QUERY_SHELLS:
        try:
            proc = subprocess.run(
                [shell, "-c", 'type -t -- "$1"', "type", program],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError:
            return shutil.which(program) is None
        return proc.stdout.strip() != "file"
    return shutil.which(program) is None


def failure_message(result: CommandResult) -> str:
    return f"Command failed with exit status {result.code}: {result.command}"


def _shell_status(returncode: int) -> int:
    # A shell killed by signal N reports -N; scripts see 128+N.
    return 128 - returncode if returncode < 0 else returncode


class Executor:
    def __init__(self, config: UtilsConfig | None = None, stream: TextIO | None = None) -> None:
        self._config = config
        self.messenger = Messenger(config, stream)

    @property
    def config(self) -> UtilsConfig:
        return self._config if self._config is not None else get_config()

    def run(self, argv: Sequence[str], site: CallSite | None = None) -> CommandResult:
        """Report, run and time one command line; never applies the error policy."""
        where = site or resolve_caller()
        policy = self.config.exec
        command = build_command_line(argv)
        if policy.report_cmd:
            self.messenger.info(f"Cmd: {command}", site=where)
        if policy.report_pwd:
            self.messenger.info(f"Cmd Pwd: {os.getcwd()}", site=where)
        if not argv:
            result = CommandResult(code=ERR_USAGE, command=command, duration_ms=0)
        else:
            result = run_command_line(command, argv[0], policy)
        if result.usage is not None:
            self.messenger.info(f"Cmd Time: {result.usage.render()}", site=where)
        if policy.report_status:
            self.messenger.info(f"Cmd Status: {result.code}", site=where)
        return result

    def execute(self, *argv: str, site: CallSite | None = None) -> int:
        where = site or resolve_caller()
        result = self.run(argv, where)
        if result.ok:
            return result.code
        if self.config.exec.exit_on_error:
            self.messenger.err(failure_message(result), site=where, kind="command_failed")
        self.messenger.warn(failure_message(result), site=where)
        return result.code

    def execute_no_exit(self, *argv: str, site: CallSite | None = None) -> int:
        # exit_on_error is deliberately ignored here.
        return self.run(argv, site or resolve_caller()).code


def run_command_line(command: str, program: str, policy: ExecPolicy) -> CommandResult:
    timed = policy.report_time and not is_builtin(program, policy.shell)
    usage: ResourceUsage | None = None
    started = time.monotonic()
    try:
        if timed:
            proc = subprocess.Popen(command, shell=True, executable=policy.shell)
            returncode, usage = wait_measured(proc, started)
        else:
            returncode = subprocess.run(command, shell=True, executable=policy.shell, check=False).returncode
        code = _shell_status(returncode)
    except OSError:
        code = ERR_SPAWN
    duration_ms = int((time.monotonic() - started) * 1000)
    return CommandResult(
        code=code,
        command=command,
        duration_ms=duration_ms,
        usage=usage,
    )


def _executor(policy: ExecPolicy | None) -> Executor:
    if policy is None:
        return Executor()
    return Executor(replace(get_config(), exec=policy))


def execute(*argv: str, policy: ExecPolicy | None = None, site: CallSite | None = None) -> int:
    """Run a command; on failure abort or warn according to ``exit_on_error``."""
    return _executor(policy).execute(*argv, site=site or resolve_caller())


def execute_no_exit(*argv: str, policy: ExecPolicy | None = None, site: CallSite | None = None) -> int:
    """Run a command and return its exit status; never aborts and never warns."""
    return _executor(policy).execute_no_exit(*argv, site=site or resolve_caller())


__all__ = [
    "CommandResult",
    "Executor",
    "build_command_line",
    "execute",
    "execute_no_exit",
    "failure_message",
    "is_builtin",
    "run_command_line",
]
