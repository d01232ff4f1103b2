"""Shared pytest fixtures for the cleanarch test suite.

Provides reusable fixtures for:
- Temporary output directories
- Sample project parameters
- A small injectable template registry
- A clean environment for settings tests
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cleanarch.scaffolder import ProjectConfig, TemplateEntry, TemplateRegistry


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory that generated projects are written into."""
    out = tmp_path / "output"
    out.mkdir()
    return out


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


@pytest.fixture
def shop_config() -> ProjectConfig:
    """The canonical example project."""
    return ProjectConfig(name="shop", module="example.com/org/shop")


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------


@pytest.fixture
def tiny_registry() -> TemplateRegistry:
    """A two-file registry with one nested directory."""
    return TemplateRegistry(
        [
            TemplateEntry("app/main.txt", "project {{.Name}} in {{.Module}}\n"),
            TemplateEntry("README.txt", "# {{.Name}}\n"),
        ],
        ["app"],
    )


@pytest.fixture
def broken_registry() -> TemplateRegistry:
    """A registry whose second template has an unknown field."""
    return TemplateRegistry(
        [
            TemplateEntry("ok.txt", "{{.Name}}\n"),
            TemplateEntry("bad.txt", "{{.Version}}\n"),
            TemplateEntry("never.txt", "unreached\n"),
        ],
        [],
    )


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every CLEANARCH_* variable for the duration of a test."""
    for var in (
        "CLEANARCH_OUTPUT_DIR",
        "CLEANARCH_OVERWRITE",
        "CLEANARCH_ATOMIC",
        "CLEANARCH_DRY_RUN",
        "CLEANARCH_QUIET",
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
