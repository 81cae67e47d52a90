"""Process-wide configuration for messages and command execution.

The library reads the active configuration on every call, so a script can flip
a flag between two invocations and the next call sees it:

    cfg = get_config()
    cfg.exec.report_time = True
    execute("make", "all")
    cfg.exec.report_time = False

Every field can also be set from the environment with a ``SCRIPTUTILS_`` variable
(see ``ENV_FIELDS``) or from a YAML/JSON file via ``load_config``.
"""

from __future__ import annotations

import copy
import json
import shutil
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from . import schema
from .env import environ
from .errors import ScriptError
from .exit_codes import ERR_CONFIG, ERR_DEFAULT

DEFAULT_PREFIX_FORMAT = "%date %time %type %filebase %line "

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def default_shell() -> str:
    return shutil.which("bash") or "/bin/sh"


@dataclass
class MessageConfig:
    msg_enable: bool = True
    debug_enable: bool = True
    info_enable: bool = True
    warn_enable: bool = True
    err_enable: bool = True
    err_no_exit_enable: bool = True
    err_exit_code: int = ERR_DEFAULT
    prefix_format: str = DEFAULT_PREFIX_FORMAT
    log_json: bool = False


@dataclass
class ExecPolicy:
    report_cmd: bool = True
    report_pwd: bool = False
    report_time: bool = False
    report_status: bool = False
    exit_on_error: bool = True
    shell: str = field(default_factory=default_shell)


# env var -> (section, field)
ENV_FIELDS: dict[str, tuple[str, str]] = {
    "SCRIPTUTILS_MSG_ENABLE": ("messages", "msg_enable"),
    "SCRIPTUTILS_DEBUG_ENABLE": ("messages", "debug_enable"),
    "SCRIPTUTILS_INFO_ENABLE": ("messages", "info_enable"),
    "SCRIPTUTILS_WARN_ENABLE": ("messages", "warn_enable"),
    "SCRIPTUTILS_ERR_ENABLE": ("messages", "err_enable"),
    "SCRIPTUTILS_ERR_NO_EXIT_ENABLE": ("messages", "err_no_exit_enable"),
    "SCRIPTUTILS_ERR_EXIT_CODE": ("messages", "err_exit_code"),
    "SCRIPTUTILS_MSG_PREFIX_FORMAT": ("messages", "prefix_format"),
    "SCRIPTUTILS_LOG_JSON": ("messages", "log_json"),
    "SCRIPTUTILS_EXEC_CMD": ("exec", "report_cmd"),
    "SCRIPTUTILS_EXEC_PWD": ("exec", "report_pwd"),
    "SCRIPTUTILS_EXEC_TIME": ("exec", "report_time"),
    "SCRIPTUTILS_EXEC_STATUS": ("exec", "report_status"),
    "SCRIPTUTILS_EXEC_EXIT_ON_ERROR": ("exec", "exit_on_error"),
    "SCRIPTUTILS_EXEC_SHELL": ("exec", "shell"),
}


def parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ScriptError(f"invalid boolean for {name}: {raw!r}", ERR_CONFIG, kind="config")


def parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ScriptError(f"invalid integer for {name}: {raw!r}", ERR_CONFIG, kind="config") from exc


@dataclass
class UtilsConfig:
    messages: MessageConfig = field(default_factory=MessageConfig)
    exec: ExecPolicy = field(default_factory=ExecPolicy)

    def copy(self) -> UtilsConfig:
        return copy.deepcopy(self)

    def apply_env(self, env: Mapping[str, str] | None = None) -> UtilsConfig:
        source = environ() if env is None else env
        for name, (section, attr) in ENV_FIELDS.items():
            raw = source.get(name)
            if raw is None:
                continue
            target = getattr(self, section)
            current = getattr(target, attr)
            if isinstance(current, bool):
                setattr(target, attr, parse_bool(name, raw))
            elif isinstance(current, int):
                setattr(target, attr, parse_int(name, raw))
            else:
                setattr(target, attr, raw)
        return self

    def apply_mapping(self, payload: Mapping[str, Any]) -> UtilsConfig:
        for section in ("messages", "exec"):
            values = payload.get(section) or {}
            target = getattr(self, section)
            known = {f.name for f in fields(target)}
            for key, value in values.items():
                if key not in known:
                    raise ScriptError(f"unknown {section} config key: {key}", ERR_CONFIG, kind="config")
                setattr(target, key, value)
        return self

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> UtilsConfig:
        return cls().apply_env(env)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> UtilsConfig:
        return cls().apply_mapping(payload)


def read_config_payload(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScriptError(f"cannot read config {path}: {exc}", ERR_CONFIG, kind="config") from exc
    try:
        if path.suffix in {".yaml", ".yml"}:
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ScriptError(f"cannot parse config {path}: {exc}", ERR_CONFIG, kind="config") from exc
    return payload if payload is not None else {}


def load_config(path: str | Path, base: UtilsConfig | None = None) -> UtilsConfig:
    """Load a YAML or JSON config file on top of ``base`` (defaults if omitted).

    The file is validated against the bundled schema before any field is applied.
    """
    payload = read_config_payload(Path(path))
    schema.validate(payload)
    target = base.copy() if base is not None else UtilsConfig()
    return target.apply_mapping(payload)


_ACTIVE: UtilsConfig | None = None


def get_config() -> UtilsConfig:
    global _ACTIVE
    if _ACTIVE is None:
        _ACTIVE = UtilsConfig.from_env()
    return _ACTIVE


def set_config(config: UtilsConfig) -> UtilsConfig:
    global _ACTIVE
    _ACTIVE = config
    return config


def reset_config() -> None:
    global _ACTIVE
    _ACTIVE = None


__all__ = [
    "DEFAULT_PREFIX_FORMAT",
    "ENV_FIELDS",
    "ExecPolicy",
    "MessageConfig",
    "UtilsConfig",
    "default_shell",
    "get_config",
    "load_config",
    "parse_bool",
    "parse_int",
    "reset_config",
    "set_config",
]
