from __future__ import annotations

import io
import os
from collections.abc import Iterator

import pytest
from hypothesis import settings

from scriptutils.core.config import UtilsConfig, reset_config, set_config

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("scriptutils", deadline=None)
settings.load_profile("scriptutils")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in list(os.environ):
        if name.startswith("SCRIPTUTILS_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config() -> UtilsConfig:
    cfg = UtilsConfig()
    cfg.exec.shell = "/bin/sh"
    return set_config(cfg)


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()
