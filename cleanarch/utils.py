"""Shared console helpers for cleanarch.

All user-facing output goes through one Rich ``Console`` so that colours,
tables and trees render consistently and can be captured in tests.

Messages, paths and module names are user data and may contain square
brackets, so they are always passed to Rich as ``Text`` and never parsed
as markup.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

console = Console()


# ---------------------------------------------------------------------------
# Status lines
# ---------------------------------------------------------------------------


def _status(symbol: str, message: str, style: str) -> None:
    line = Text(f"{symbol} ", style=style)
    line.append(message, style=style)
    console.print(line)


def print_success(message: str) -> None:
    _status("✓", message, "bold green")


def print_error(message: str) -> None:
    _status("✗", message, "bold red")


def print_warning(message: str) -> None:
    _status("!", message, "bold yellow")


# ---------------------------------------------------------------------------
# Tables and trees
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(Text(key), Text(str(value)))

    console.print(table)
    console.print()


def build_file_tree(root_label: str, paths: Iterable[str]) -> Tree:
    """Build a Rich ``Tree`` from slash-separated relative paths.

    Intermediate directories get their own branch, each shown once.
    """
    tree = Tree(Text(f"{root_label}/", style="bold"))
    branches: dict[tuple[str, ...], Tree] = {(): tree}
    for path in paths:
        parts = PurePosixPath(path).parts
        for depth in range(1, len(parts)):
            key = parts[:depth]
            if key not in branches:
                branches[key] = branches[key[:-1]].add(Text(f"{parts[depth - 1]}/", style="blue"))
        branches[parts[:-1]].add(Text(parts[-1]))
    return tree


def print_file_tree(root_label: str, paths: Iterable[str]) -> None:
    console.print(build_file_tree(root_label, paths))
