# tests/test_config.py
import pytest

from loom.config import ConfigError, LoomConfig, config_from_env


def test_defaults():
    cfg = config_from_env({})
    assert cfg == LoomConfig()
    assert cfg.display == "window"
    assert cfg.cell_size == 20
    assert cfg.pacing == pytest.approx(0.001)


def test_env_overrides():
    cfg = config_from_env({
        "LOOM_DISPLAY": "Terminal",
        "LOOM_CELL_SIZE": "8",
        "LOOM_PACING_MS": "2.5",
        "LOOM_SEED": "99",
        "LOOM_MAX_STEPS": "1000",
        "LOOM_LOG": "debug",
    })
    assert cfg.display == "terminal"
    assert cfg.cell_size == 8
    assert cfg.pacing == pytest.approx(0.0025)
    assert cfg.seed == 99
    assert cfg.max_steps == 1000
    assert cfg.log_level == "debug"


def test_blank_env_values_are_ignored():
    assert config_from_env({"LOOM_SEED": "  "}).seed is None


def test_headless_never_paces():
    assert LoomConfig(display="none", pacing_ms=5).pacing == 0.0


def test_merged_skips_none():
    cfg = LoomConfig(seed=3).merged({"seed": None, "display": "none", "unknown": 1})
    assert cfg.seed == 3
    assert cfg.display == "none"


@pytest.mark.parametrize("env", [
    {"LOOM_DISPLAY": "hologram"},
    {"LOOM_CELL_SIZE": "0"},
    {"LOOM_PACING_MS": "-1"},
    {"LOOM_MAX_STEPS": "0"},
    {"LOOM_SEED": "abc"},
])
def test_bad_values_raise(env):
    with pytest.raises(ConfigError):
        config_from_env(env)
