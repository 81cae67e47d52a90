from __future__ import annotations

import argparse
import dataclasses
import json
import sys

from .. import __version__
from ..core.assertions import assert_shell
from ..core.callsite import CallSite
from ..core.config import UtilsConfig, load_config
from ..core.errors import ScriptError
from ..core.exec import Executor
from ..core.exit_codes import ERR_INTERNAL, ERR_USAGE
from ..core.fs import mkdirs
from ..core.messages import Messenger
from ..core.timefmt import convert_seconds_to_hhmmss

MSG_LEVELS = ("debug", "info", "warn", "err", "err-no-exit")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="scriptutils")
    p.add_argument("--version", action="version", version=f"scriptutils {__version__}")
    p.add_argument("--config", help="YAML or JSON config file")
    p.add_argument("--format", dest="prefix_format", help="message prefix template, e.g. '%%type %%line '")
    p.add_argument("--json", action="store_true", help="emit messages as JSON lines")
    p.add_argument("--site", help="report messages as coming from FILE:LINE[:FUNC]")
    sub = p.add_subparsers(dest="cmd", required=True)

    exec_p = sub.add_parser("exec", help="run a command with reporting and error policy")
    exec_p.add_argument("--no-exit", action="store_true", help="never abort on failure, just return the status")
    exec_p.add_argument("--warn-only", action="store_true", help="warn instead of aborting on failure")
    exec_p.add_argument("--time", action="store_true", help="report elapsed/cpu/memory usage")
    exec_p.add_argument("--pwd", action="store_true", help="report the working directory")
    exec_p.add_argument("--status", action="store_true", help="report the exit status")
    exec_p.add_argument("--quiet-cmd", action="store_true", help="do not report the command line")
    exec_p.add_argument("argv", nargs=argparse.REMAINDER)

    msg_p = sub.add_parser("msg", help="print a prefixed message")
    msg_p.add_argument("level", choices=MSG_LEVELS)
    msg_p.add_argument("lines", nargs="+")

    hms_p = sub.add_parser("hhmmss", help="convert seconds to HH:MM:SS")
    hms_p.add_argument("value")

    mk_p = sub.add_parser("mkdirs", help="create directories and missing parents")
    mk_p.add_argument("paths", nargs="+")

    assert_p = sub.add_parser("assert", help="abort unless a shell test succeeds")
    assert_p.add_argument("expr", nargs=argparse.REMAINDER)

    cfg_p = sub.add_parser("config", help="print the effective configuration")
    cfg_p.add_argument("--json", dest="config_json", action="store_true", help="emit JSON output")
    return p


def _resolve_config(ns: argparse.Namespace) -> UtilsConfig:
    cfg = load_config(ns.config) if ns.config else UtilsConfig()
    cfg.apply_env()
    if ns.prefix_format is not None:
        cfg.messages.prefix_format = ns.prefix_format
    if ns.json:
        cfg.messages.log_json = True
    if ns.cmd == "exec":
        if ns.warn_only:
            cfg.exec.exit_on_error = False
        if ns.time:
            cfg.exec.report_time = True
        if ns.pwd:
            cfg.exec.report_pwd = True
        if ns.status:
            cfg.exec.report_status = True
        if ns.quiet_cmd:
            cfg.exec.report_cmd = False
    return cfg


def _resolve_site(ns: argparse.Namespace) -> CallSite | None:
    if not ns.site:
        return None
    try:
        return CallSite.parse(ns.site)
    except ValueError as exc:
        raise ScriptError(str(exc), ERR_USAGE, kind="usage") from exc


def _strip_separator(args: list[str]) -> list[str]:
    return args[1:] if args and args[0] == "--" else list(args)


def _run_exec(ns: argparse.Namespace, cfg: UtilsConfig, site: CallSite | None) -> int:
    argv = _strip_separator(ns.argv)
    if not argv:
        raise ScriptError("exec: no command given", ERR_USAGE, kind="usage")
    executor = Executor(cfg)
    if ns.no_exit:
        return executor.execute_no_exit(*argv, site=site)
    return executor.execute(*argv, site=site)


def _run_msg(ns: argparse.Namespace, messenger: Messenger, site: CallSite | None) -> int:
    emit = {
        "debug": messenger.debug,
        "info": messenger.info,
        "warn": messenger.warn,
        "err-no-exit": messenger.err_no_exit,
        "err": messenger.err,
    }[ns.level]
    emit(*ns.lines, site=site)
    return 0


def dispatch(ns: argparse.Namespace, cfg: UtilsConfig) -> int:
    site = _resolve_site(ns)
    messenger = Messenger(cfg)
    if ns.cmd == "exec":
        return _run_exec(ns, cfg, site)
    if ns.cmd == "msg":
        return _run_msg(ns, messenger, site)
    if ns.cmd == "hhmmss":
        status, text = convert_seconds_to_hhmmss(ns.value)
        print(text)
        return status
    if ns.cmd == "mkdirs":
        mkdirs(*ns.paths)
        return 0
    if ns.cmd == "assert":
        expr = _strip_separator(ns.expr)
        if not expr:
            raise ScriptError("assert: no expression given", ERR_USAGE, kind="usage")
        assert_shell(" ".join(expr), config=cfg, messenger=messenger, site=site)
        return 0
    if ns.cmd == "config":
        payload = dataclasses.asdict(cfg)
        print(json.dumps(payload, sort_keys=True) if ns.config_json else json.dumps(payload, indent=2, sort_keys=True))
        return 0
    raise ScriptError(f"unknown command: {ns.cmd}", ERR_USAGE, kind="usage")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    try:
        cfg = _resolve_config(ns)
        return dispatch(ns, cfg)
    except ScriptError as exc:
        if not exc.reported:
            print(f"scriptutils: {exc.message}", file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(f"scriptutils: internal error: {exc}", file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
