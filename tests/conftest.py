"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

# Keep logs and settings written during the run out of the user's home.
# This must happen before tokenglow modules compute their paths on import.
os.environ["XDG_CONFIG_HOME"] = tempfile.mkdtemp(prefix="tokenglow-tests-")
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import tokenglow.core.config as config_mod  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path: Path) -> Path:
    """Point user settings at a per-test directory and clear env overrides."""

    config_root = tmp_path / "config"
    monkeypatch.setattr(config_mod, "CONFIG_DIR", config_root)
    monkeypatch.setattr(config_mod, "USER_SETTINGS_PATH", config_root / "settings.yaml")
    for key in list(os.environ):
        if key.startswith(config_mod.ENV_PREFIX):
            monkeypatch.delenv(key)
    return config_root


@pytest.fixture(scope="session")
def qt_app():
    """Provide a shared QApplication, skipping when PySide6 is unavailable."""

    qtwidgets = pytest.importorskip("PySide6.QtWidgets")
    return qtwidgets.QApplication.instance() or qtwidgets.QApplication([])
