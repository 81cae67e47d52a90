from __future__ import annotations

from pathlib import Path


def ensure_dir(path: str | Path) -> Path:
    out = Path(path)
    out.mkdir(parents=True, exist_ok=True)
    return out


def mkdirs(*paths: str | Path) -> list[Path]:
    return [ensure_dir(path) for path in paths]


__all__ = ["ensure_dir", "mkdirs"]
