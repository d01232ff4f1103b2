"""Unit tests for the Rich console helpers (cleanarch.utils)."""

from __future__ import annotations

import pytest
from rich.console import Console

from cleanarch import utils
from cleanarch.utils import build_file_tree


@pytest.fixture
def recording_console(monkeypatch: pytest.MonkeyPatch) -> Console:
    console = Console(record=True, width=120, color_system=None)
    monkeypatch.setattr(utils, "console", console)
    return console


class TestPrintHelpers:
    @pytest.mark.unit
    def test_print_success(self, recording_console):
        utils.print_success("Project generated successfully!")
        assert "Project generated successfully!" in recording_console.export_text()

    @pytest.mark.unit
    def test_print_error(self, recording_console):
        utils.print_error("boom")
        assert "boom" in recording_console.export_text()

    @pytest.mark.unit
    def test_print_warning(self, recording_console):
        utils.print_warning("careful")
        assert "careful" in recording_console.export_text()

    @pytest.mark.unit
    def test_summary_table(self, recording_console):
        utils.print_summary_table({"Project": "shop", "Module": "example.com/org/shop"})
        text = recording_console.export_text()
        assert "Summary" in text
        assert "example.com/org/shop" in text


class TestFileTree:
    @pytest.mark.unit
    def test_directories_shown_once(self):
        console = Console(record=True, width=120, color_system=None)
        console.print(build_file_tree("shop", ["pkg/auth/jwt.go", "pkg/config/config.go", "go.mod"]))
        text = console.export_text()
        assert text.count("pkg/") == 1
        assert "auth/" in text and "config/" in text
        assert "jwt.go" in text and "go.mod" in text
        assert text.splitlines()[0].strip() == "shop/"

    @pytest.mark.unit
    def test_print_file_tree(self, recording_console):
        utils.print_file_tree("shop", [".env"])
        assert ".env" in recording_console.export_text()

    @pytest.mark.unit
    def test_bracketed_labels_are_literal(self):
        console = Console(record=True, width=120, color_system=None)
        console.print(build_file_tree("shop[/b]", ["x[red]/y[/red].go"]))
        text = console.export_text()
        assert text.splitlines()[0].strip() == "shop[/b]/"
        assert "x[red]/" in text and "y[/red].go" in text


class TestMarkupSafety:
    @pytest.mark.unit
    @pytest.mark.parametrize("helper", ["print_success", "print_error", "print_warning"])
    def test_messages_not_parsed_as_markup(self, recording_console, helper):
        getattr(utils, helper)("module example.com/x[/b] [bold]")
        assert "module example.com/x[/b] [bold]" in recording_console.export_text()

    @pytest.mark.unit
    def test_summary_table_values_literal(self, recording_console):
        utils.print_summary_table({"[Module]": "example.com/x[/b]"})
        text = recording_console.export_text()
        assert "[Module]" in text
        assert "example.com/x[/b]" in text
