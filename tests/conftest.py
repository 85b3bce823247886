# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import pytest
from typer.testing import CliRunner

from digital_rain.engine import RandomSource


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """
    Keep the user's real config file and DIGITAL_RAIN_* variables out of
    every test.
    """
    import os

    for key in list(os.environ):
        if key.startswith("DIGITAL_RAIN_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(
        "digital_rain.config.DEFAULT_CONFIG_PATH", tmp_path / "missing" / "config.toml"
    )
    yield tmp_path


@pytest.fixture()
def rng() -> RandomSource:
    return RandomSource(1234)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()
