from __future__ import annotations

from pathlib import Path

import pytest
from helpers import run_script

from scriptutils import app
from scriptutils.core.config import UtilsConfig
from scriptutils.core.errors import ScriptError
from scriptutils.core.exec import execute
from scriptutils.core.messages import err


def test_call_guarded_returns_main_status() -> None:
    assert app.call_guarded(lambda: None) == 0
    assert app.call_guarded(lambda: 3) == 3


def test_err_becomes_configured_exit_code(config: UtilsConfig, capsys: pytest.CaptureFixture[str]) -> None:
    config.messages.prefix_format = "%type "
    config.messages.err_exit_code = 12

    def main() -> int:
        err("giving up")
        return 0

    assert app.call_guarded(main) == 12
    assert capsys.readouterr().err == "ERROR giving up\n"


def test_unreported_errors_are_printed_once(capsys: pytest.CaptureFixture[str]) -> None:
    def main() -> int:
        raise ScriptError("bad input", 2)

    assert app.call_guarded(main) == 2
    assert capsys.readouterr().err == "ERROR: bad input\n"


def test_run_main_exits_with_configured_code_not_command_status(config: UtilsConfig) -> None:
    config.exec.report_cmd = False
    config.messages.msg_enable = False

    def main() -> int:
        execute("exit", "42")
        return 0

    with pytest.raises(SystemExit) as excinfo:
        app.run_main(main)
    assert excinfo.value.code == 1


def test_main_guard_wraps_entry_points(config: UtilsConfig) -> None:
    config.messages.msg_enable = False

    @app.main_guard
    def main(code: int) -> int:
        if code:
            err("failed")
        return 0

    assert main(0) == 0
    assert main(1) == 1
    assert main.__name__ == "main"


_SCRIPT = """\
from scriptutils import err, run_main


def main() -> int:
    err("giving up")
    return 0


{call}
"""


@pytest.mark.integration
def test_script_under_run_main_exits_with_err_exit_code(tmp_path: Path) -> None:
    script = tmp_path / "job.py"
    script.write_text(_SCRIPT.format(call="run_main(main)"), encoding="utf-8")
    proc = run_script(script, env={"SCRIPTUTILS_ERR_EXIT_CODE": "7", "SCRIPTUTILS_MSG_PREFIX_FORMAT": "%type "})
    assert proc.returncode == 7
    assert proc.stderr == "ERROR giving up\n"


@pytest.mark.integration
def test_script_without_handler_exits_with_traceback(tmp_path: Path) -> None:
    script = tmp_path / "job.py"
    script.write_text(_SCRIPT.format(call="main()"), encoding="utf-8")
    proc = run_script(script, env={"SCRIPTUTILS_ERR_EXIT_CODE": "7"})
    assert proc.returncode == 1
    assert "Traceback" in proc.stderr
    assert "ScriptError" in proc.stderr
