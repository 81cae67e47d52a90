"""scriptutils core package."""
from .callsite import CallSite, resolve_caller
from .config import ExecPolicy, MessageConfig, UtilsConfig, get_config, load_config, reset_config, set_config
from .errors import ScriptError
from .exec import CommandResult, Executor, build_command_line, execute, execute_no_exit
from .format import Severity, format_prefix
from .messages import Messenger, debug, err, err_no_exit, info, warn

__all__ = [
    "CallSite",
    "CommandResult",
    "ExecPolicy",
    "Executor",
    "MessageConfig",
    "Messenger",
    "ScriptError",
    "Severity",
    "UtilsConfig",
    "build_command_line",
    "debug",
    "err",
    "err_no_exit",
    "execute",
    "execute_no_exit",
    "format_prefix",
    "get_config",
    "info",
    "load_config",
    "reset_config",
    "resolve_caller",
    "set_config",
    "warn",
]
