from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def run_scriptutils(*args: str, cwd: Path | None = None, env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    merged = os.environ.copy()
    merged["PYTHONPATH"] = str(ROOT / "src")
    merged.update(env or {})
    return subprocess.run(
        [sys.executable, "-m", "scriptutils", *args],
        cwd=(cwd or ROOT),
        env=merged,
        text=True,
        capture_output=True,
        check=False,
    )


def run_script(script: Path, env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    merged = os.environ.copy()
    merged["PYTHONPATH"] = str(ROOT / "src")
    merged.update(env or {})
    return subprocess.run([sys.executable, str(script)], env=merged, text=True, capture_output=True, check=False)
