"""Tests for TemplateRegistry, TemplateEntry and the shipped default registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from cleanarch.scaffolder.registry import (
    DEFAULT_DIRECTORIES,
    DEFAULT_ENTRIES,
    TemplateEntry,
    TemplateRegistry,
    default_registry,
)
from cleanarch.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


EXPECTED_FILES = [
    "cmd/api/main.go",
    "internal/domain/user.go",
    "internal/usecase/user_usecase.go",
    "internal/repository/user_repository.go",
    "internal/handler/user_handler.go",
    "pkg/config/config.go",
    "pkg/database/mongodb.go",
    "pkg/auth/jwt.go",
    "go.mod",
    ".env",
]


class TestTemplateEntry:
    def test_valid_entry(self):
        entry = TemplateEntry("cmd/api/main.go", "package main\n")
        assert entry.path == "cmd/api/main.go"

    def test_frozen(self):
        entry = TemplateEntry("a.txt", "x")
        with pytest.raises(AttributeError):
            entry.body = "y"  # type: ignore[misc]

    @pytest.mark.parametrize("path", ["", "/etc/passwd", "../escape.txt", "a/../../b", "./a", "a\\b"])
    def test_invalid_paths_rejected(self, path):
        with pytest.raises(ValueError):
            TemplateEntry(path, "x")


class TestTemplateRegistry:
    def test_declaration_order_kept(self, tiny_registry):
        assert [e.path for e in tiny_registry.entries] == ["app/main.txt", "README.txt"]
        assert [e.path for e in tiny_registry] == ["app/main.txt", "README.txt"]

    def test_plan(self, tiny_registry):
        assert tiny_registry.plan() == ("app",)

    def test_lookup(self, tiny_registry):
        assert "README.txt" in tiny_registry
        assert tiny_registry.get("README.txt").body == "# {{.Name}}\n"
        assert len(tiny_registry) == 2

    def test_immutable(self, tiny_registry):
        with pytest.raises(AttributeError):
            tiny_registry._entries = ()
        with pytest.raises(TypeError):
            tiny_registry.paths["x"] = TemplateEntry("x", "")  # type: ignore[index]

    def test_duplicate_path_rejected(self):
        with pytest.raises(ValueError, match="duplicate"):
            TemplateRegistry([TemplateEntry("a", "1"), TemplateEntry("a", "2")], [])

    def test_uncovered_directory_rejected(self):
        with pytest.raises(ValueError, match="missing from the plan"):
            TemplateRegistry([TemplateEntry("lib/x.txt", "")], ["app"])

    def test_parent_of_planned_directory_counts_as_covered(self):
        registry = TemplateRegistry(
            [TemplateEntry("pkg/README", ""), TemplateEntry("pkg/auth/jwt.go", "")],
            ["pkg/auth"],
        )
        assert len(registry) == 2

    def test_invalid_directory_rejected(self):
        with pytest.raises(ValueError):
            TemplateRegistry([], ["/abs"])

    def test_from_directory(self, tmp_path: Path):
        (tmp_path / "one.j2").write_text("{{.Name}}\n", encoding="utf-8")
        registry = TemplateRegistry.from_directory(
            tmp_path, [("out/one.txt", "one.j2")], ["out"]
        )
        assert registry.get("out/one.txt").body == "{{.Name}}\n"

    def test_from_directory_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            TemplateRegistry.from_directory(tmp_path, [("a", "nope.j2")], [])


class TestDefaultRegistry:
    def test_ten_entries_in_order(self):
        registry = default_registry()
        assert [e.path for e in registry] == EXPECTED_FILES
        assert [path for path, _ in DEFAULT_ENTRIES] == EXPECTED_FILES

    def test_eight_directories(self):
        assert default_registry().plan() == DEFAULT_DIRECTORIES
        assert len(DEFAULT_DIRECTORIES) == 8

    def test_loaded_once(self):
        assert default_registry() is default_registry()

    def test_every_template_is_valid(self):
        renderer = TemplateRenderer()
        params = {"Name": "shop", "Module": "example.com/org/shop"}
        for entry in default_registry():
            out = renderer.render(entry.body, params, name=entry.path)
            assert "{{." not in out

    def test_go_mod_starts_with_module_marker(self):
        body = default_registry().get("go.mod").body
        assert body.splitlines()[0] == "module {{.Module}}"

    def test_env_has_no_markers(self):
        assert TemplateRenderer().find_fields(default_registry().get(".env").body) == set()

    def test_entry_point_imports_handler_package(self):
        body = default_registry().get("cmd/api/main.go").body
        assert '"{{.Module}}/internal/handler"' in body
