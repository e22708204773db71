"""Shared fixtures."""

import math
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from occ.compaction import estimator
from occ.config.schema import Config

# The first text draw on a fresh checkout builds Hypothesis's unicode charmap,
# which trips the too_slow health check; the generated data is unaffected.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")


class FakeEncoder:
    """Roughly four characters per token, no download needed."""

    def encode(self, text: str, disallowed_special=()) -> list[int]:
        return list(range(math.ceil(len(text) / 4)))


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real home directory, config and encoder."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    for name in (
        "CLAWDBOT_STATE_DIR",
        "CLAWDBOT_AGENT_ID",
        "OCC_PRESET",
        "OCC_OUTPUT_FORMAT",
        "OCC_VERBOSE",
        "OCC_STATE_DIR",
        "OCC_AGENT_ID",
        "OCC_STRICT_PARSING",
        "OCC_CUSTOM_PRESETS",
    ):
        monkeypatch.delenv(name, raising=False)

    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    monkeypatch.setattr(estimator, "_get_encoder", lambda: FakeEncoder())


@pytest.fixture
def state_dir(tmp_path) -> Path:
    path = tmp_path / "state"
    (path / "agents" / "main" / "sessions").mkdir(parents=True)
    return path


@pytest.fixture
def config(state_dir) -> Config:
    return Config(state_dir=str(state_dir))
