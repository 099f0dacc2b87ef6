from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

import tokenglow.core.config as config_mod
from tokenglow.core.config import (
    ColorMode,
    ConfigManager,
    DomainPolicy,
    GradientConfig,
    PastelParameters,
    parse_bool,
    parse_color,
)


def test_shipped_defaults_match_builtin_defaults() -> None:
    assert config_mod.DEFAULTS_PATH.exists()

    manager = ConfigManager(environ={})

    assert manager.gradient_config() == GradientConfig()


def test_builtin_defaults() -> None:
    config = GradientConfig()

    assert config.tokens == ("sudo",)
    assert config.mode is ColorMode.PASTEL
    assert config.policy is DomainPolicy.WINDOW
    assert len(config.palette) == 7
    assert config.word_boundary is False
    assert config.ignore_case is False
    assert config.pastel == PastelParameters(260, 0.35, 0.85, 20, 6, 300)


def test_config_manager_uses_user_settings(isolated_config: Path) -> None:
    manager = ConfigManager(environ={})
    manager.set("gradient", {"tokens": ["doas"], "pastel": {"base_hue": 120}})
    manager.save()

    assert config_mod.USER_SETTINGS_PATH.exists()
    reloaded = ConfigManager(environ={})
    config = reloaded.gradient_config()

    assert config.tokens == ("doas",)
    assert config.pastel.base_hue == 120
    # Unset nested keys keep coming from the shipped defaults.
    assert config.pastel.saturation == 0.35


def test_user_settings_deep_merge_over_defaults(isolated_config: Path) -> None:
    isolated_config.mkdir(parents=True)
    config_mod.USER_SETTINGS_PATH.write_text(
        yaml.safe_dump({"gradient": {"mode": "palette", "palette": ["red", "208", 21]}}),
        encoding="utf-8",
    )

    config = ConfigManager(environ={}).gradient_config()

    assert config.mode is ColorMode.PALETTE
    assert config.palette == ("red", 208, 21)
    assert config.tokens == ("sudo",)


def test_environment_overrides_win() -> None:
    environ = {
        "TOKENGLOW_TOKENS": "sudo doas",
        "TOKENGLOW_MODE": "PALETTE",
        "TOKENGLOW_POLICY": "compact",
        "TOKENGLOW_PALETTE": "red 208  blue",
        "TOKENGLOW_WORD_BOUNDARY": "on",
        "TOKENGLOW_IGNORE_CASE": "yes",
        "TOKENGLOW_BASE_HUE": "15",
        "TOKENGLOW_PASTEL_SAT": "0.5",
        "TOKENGLOW_MAX_SPAN_DEG": "90",
    }

    config = ConfigManager(environ=environ).gradient_config()

    assert config.tokens == ("sudo", "doas")
    assert config.mode is ColorMode.PALETTE
    assert config.policy is DomainPolicy.COMPACT
    assert config.palette == ("red", 208, "blue")
    assert config.word_boundary is True
    assert config.ignore_case is True
    assert config.pastel.base_hue == 15
    assert config.pastel.saturation == 0.5
    assert config.pastel.max_span_deg == 90
    assert config.pastel.lightness == 0.85


def test_environment_is_read_from_os_environ_by_default(monkeypatch) -> None:
    monkeypatch.setenv("TOKENGLOW_TOKENS", "please")

    assert ConfigManager().gradient_config().tokens == ("please",)


def test_invalid_values_are_reported_and_ignored(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="tokenglow.core.config")
    environ = {
        "TOKENGLOW_MODE": "rainbow",
        "TOKENGLOW_IGNORE_CASE": "maybe",
        "TOKENGLOW_BASE_HUE": "blue",
    }

    config = ConfigManager(environ=environ).gradient_config()

    assert config.mode is ColorMode.PASTEL
    assert config.ignore_case is False
    assert config.pastel.base_hue == 260
    assert "TOKENGLOW_MODE" in caplog.text
    assert "TOKENGLOW_BASE_HUE" in caplog.text


def test_non_mapping_gradient_section_is_ignored(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="tokenglow.core.config")
    manager = ConfigManager(environ={})
    manager.set("gradient", ["sudo"])

    assert manager.gradient_config() == GradientConfig()
    assert "non-mapping" in caplog.text


def test_malformed_yaml_propagates(isolated_config: Path) -> None:
    isolated_config.mkdir(parents=True)
    config_mod.USER_SETTINGS_PATH.write_text("gradient: [unclosed", encoding="utf-8")

    with pytest.raises(yaml.YAMLError):
        ConfigManager(environ={})


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("on", True), ("1", True), ("TRUE", True), ("off", False), ("0", False), ("", False), (True, True)],
)
def test_parse_bool(raw, expected) -> None:  # noqa: ANN001
    assert parse_bool(raw) is expected


def test_parse_color() -> None:
    assert parse_color("196") == 196
    assert parse_color(21) == 21
    assert parse_color(" cyan ") == "cyan"
    with pytest.raises(ValueError):
        parse_color("")
    with pytest.raises(ValueError):
        parse_color(True)


def test_with_overrides_returns_a_new_config() -> None:
    config = GradientConfig()
    changed = config.with_overrides(tokens=("doas",))

    assert changed.tokens == ("doas",)
    assert config.tokens == ("sudo",)
