from __future__ import annotations

from pathlib import Path

import pytest

from helm_vendor.config.settings import settings


@pytest.fixture
def charts_dir(tmp_path: Path) -> Path:
    """A charts directory inside a scratch repository root."""
    path = tmp_path / "repo" / "charts"
    path.mkdir(parents=True)
    return path


@pytest.fixture(autouse=True)
def default_tool_binaries(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "diff_binary", "diff")
    monkeypatch.setattr(settings, "patch_binary", "patch")
    monkeypatch.setattr(settings, "helm_binary", "helm")
    monkeypatch.setattr(settings, "tool_timeout", None)
