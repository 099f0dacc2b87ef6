"""Configuration management for tokenglow."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping, Union

import yaml

from tokenglow.core.logging import get_logger

CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "tokenglow"
DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "settings" / "defaults.yaml"
USER_SETTINGS_PATH = CONFIG_DIR / "settings.yaml"

ENV_PREFIX = "TOKENGLOW_"

ColorValue = Union[int, str]

DEFAULT_PALETTE: tuple[ColorValue, ...] = (196, 208, 226, 46, 51, 21, 201)

_TRUE_WORDS = {"1", "on", "true", "yes"}
_FALSE_WORDS = {"0", "off", "false", "no", ""}


class ColorMode(str, Enum):
    PASTEL = "pastel"
    PALETTE = "palette"


class DomainPolicy(str, Enum):
    """How painted positions are mapped onto gradient steps."""

    WINDOW = "window"
    COMPACT = "compact"
    SPAN = "span"


@dataclass(frozen=True)
class PastelParameters:
    base_hue: float = 260.0
    saturation: float = 0.35
    lightness: float = 0.85
    base_span_deg: float = 20.0
    per_char_span_deg: float = 6.0
    max_span_deg: float = 300.0


@dataclass(frozen=True)
class GradientConfig:
    """Read-only settings for one paint pass."""

    tokens: tuple[str, ...] = ("sudo",)
    mode: ColorMode = ColorMode.PASTEL
    policy: DomainPolicy = DomainPolicy.WINDOW
    palette: tuple[ColorValue, ...] = DEFAULT_PALETTE
    word_boundary: bool = False
    ignore_case: bool = False
    pastel: PastelParameters = field(default_factory=PastelParameters)
    memo: str = "tokenglow"

    def with_overrides(self, **changes: Any) -> "GradientConfig":
        """Return a copy with the given fields replaced."""

        return replace(self, **changes)


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def parse_color(value: Any) -> ColorValue:
    """Palette entries are ints when they look like numbers, names otherwise."""

    if isinstance(value, bool):
        raise ValueError(f"not a color: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    if not text:
        raise ValueError("empty color")
    return text


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ValueError(f"not a list: {value!r}")


class ConfigManager:
    """Loads default and user configuration and provides helpers to query values."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.logger = get_logger(__name__)
        self.environ = os.environ if environ is None else environ
        self.defaults = self._load_yaml(DEFAULTS_PATH)
        if USER_SETTINGS_PATH.exists():
            self.user_settings = self._load_yaml(USER_SETTINGS_PATH)
        else:
            self.user_settings = {}
        self.settings = self._deep_merge(self.defaults, self.user_settings)

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    def set(self, key: str, value: Any) -> None:
        self.settings[key] = value

    def save(self) -> None:
        USER_SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        with USER_SETTINGS_PATH.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(self.settings, handle)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        merged: dict[str, Any] = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    # Gradient settings -------------------------------------------------
    def gradient_config(self) -> GradientConfig:
        """Resolve settings and environment overrides into a GradientConfig.

        Environment variables win over YAML settings. A value that cannot be
        parsed is reported and the value resolved so far is kept.
        """

        section = self.settings.get("gradient") or {}
        if not isinstance(section, dict):
            self.logger.warning("Ignoring non-mapping 'gradient' settings: %r", section)
            section = {}
        pastel_section = section.get("pastel") or {}
        if not isinstance(pastel_section, dict):
            self.logger.warning("Ignoring non-mapping 'gradient.pastel' settings: %r", pastel_section)
            pastel_section = {}

        defaults = GradientConfig()
        pastel_defaults = defaults.pastel

        tokens = self._resolve(
            "tokens", section.get("tokens"), "TOKENS", defaults.tokens,
            lambda v: tuple(str(t) for t in _as_list(v)),
        )
        palette = self._resolve(
            "palette", section.get("palette"), "PALETTE", defaults.palette,
            lambda v: tuple(parse_color(c) for c in _as_list(v)),
        )
        mode = self._resolve("mode", section.get("mode"), "MODE", defaults.mode, lambda v: ColorMode(str(v).lower()))
        policy = self._resolve(
            "policy", section.get("policy"), "POLICY", defaults.policy, lambda v: DomainPolicy(str(v).lower())
        )
        word_boundary = self._resolve(
            "word_boundary", section.get("word_boundary"), "WORD_BOUNDARY", defaults.word_boundary, parse_bool
        )
        ignore_case = self._resolve(
            "ignore_case", section.get("ignore_case"), "IGNORE_CASE", defaults.ignore_case, parse_bool
        )
        memo = self._resolve("memo", section.get("memo"), "MEMO", defaults.memo, str)

        pastel_fields = {
            "base_hue": "BASE_HUE",
            "saturation": "PASTEL_SAT",
            "lightness": "PASTEL_LIGHT",
            "base_span_deg": "BASE_SPAN_DEG",
            "per_char_span_deg": "PER_CHAR_SPAN_DEG",
            "max_span_deg": "MAX_SPAN_DEG",
        }
        pastel_values = {
            name: self._resolve(
                f"pastel.{name}", pastel_section.get(name), env_suffix, getattr(pastel_defaults, name), float
            )
            for name, env_suffix in pastel_fields.items()
        }

        return GradientConfig(
            tokens=tokens,
            mode=mode,
            policy=policy,
            palette=palette,
            word_boundary=word_boundary,
            ignore_case=ignore_case,
            pastel=PastelParameters(**pastel_values),
            memo=memo,
        )

    def _resolve(
        self,
        key: str,
        setting: Any,
        env_suffix: str,
        default: Any,
        parser: Callable[[Any], Any],
    ) -> Any:
        value = default
        if setting is not None:
            value = self._parse(key, setting, parser, value)
        env_value = self.environ.get(ENV_PREFIX + env_suffix)
        if env_value is not None:
            value = self._parse(ENV_PREFIX + env_suffix, env_value, parser, value)
        return value

    def _parse(self, key: str, raw: Any, parser: Callable[[Any], Any], fallback: Any) -> Any:
        try:
            return parser(raw)
        except (TypeError, ValueError):
            self.logger.warning("Invalid value for %s: %r; keeping %r", key, raw, fallback)
            return fallback
