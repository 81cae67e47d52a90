"""Messages, command execution and small helpers for command-line scripts.

Typical use from a script:

    from scriptutils import execute, info, run_main

    def main() -> int:
        info("building")
        execute("make", "-j4")
        return 0

    if __name__ == "__main__":
        run_main(main)
"""
from .app import call_guarded, main_guard, run_main
from .core.assertions import assert_shell, assert_that
from .core.callsite import CallSite
from .core.config import ExecPolicy, MessageConfig, UtilsConfig, get_config, load_config, reset_config, set_config
from .core.errors import ScriptError
from .core.exec import CommandResult, Executor, build_command_line, execute, execute_no_exit
from .core.format import Severity, format_prefix
from .core.fs import mkdirs
from .core.messages import Messenger, debug, err, err_no_exit, info, warn
from .core.structures import Stack, array_contains, maximum, minimum
from .core.timefmt import convert_seconds_to_hhmmss

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CallSite",
    "CommandResult",
    "ExecPolicy",
    "Executor",
    "MessageConfig",
    "Messenger",
    "ScriptError",
    "Severity",
    "Stack",
    "UtilsConfig",
    "array_contains",
    "assert_shell",
    "assert_that",
    "build_command_line",
    "call_guarded",
    "convert_seconds_to_hhmmss",
    "debug",
    "err",
    "err_no_exit",
    "execute",
    "execute_no_exit",
    "format_prefix",
    "get_config",
    "info",
    "load_config",
    "main_guard",
    "maximum",
    "minimum",
    "mkdirs",
    "reset_config",
    "run_main",
    "set_config",
    "warn",
]
