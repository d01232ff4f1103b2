"""Command-line interface for cleanarch.

Usage:
    cleanarch --name NAME --module MODULE [options]
    python -m cleanarch --help

Examples:
    cleanarch --name shop --module example.com/org/shop
    cleanarch -n shop -m example.com/org/shop --output ~/src --overwrite skip
    cleanarch -n shop -m example.com/org/shop --atomic
    cleanarch -n shop -m example.com/org/shop --dry-run
    cleanarch -n shop -m example.com/org/shop --settings scaffold.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.markup import escape
from rich.text import Text

from cleanarch.config import OverwritePolicy, ScaffoldSettings
from cleanarch.scaffolder import (
    GenerationResult,
    ProjectConfig,
    ProjectGenerator,
    ScaffoldError,
)
from cleanarch.utils import (
    console,
    print_error,
    print_file_tree,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cleanarch",
        description="Generate a Go clean-architecture API project skeleton",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  cleanarch --name shop --module example.com/org/shop\n"
            "  cleanarch -n shop -m example.com/org/shop -o ./projects --atomic\n"
        ),
    )

    parser.add_argument("--name", "-n", default="",
                        help="Name of the project (also the output directory name)")
    parser.add_argument("--module", "-m", default="",
                        help="Go module name (e.g., github.com/username/project)")
    parser.add_argument("--output", "-o", default=None,
                        help="Parent directory for the project (default: current directory)")
    parser.add_argument("--overwrite", default=None,
                        choices=[policy.value for policy in OverwritePolicy],
                        help="What to do with existing files (default: overwrite)")
    parser.add_argument("--atomic", action="store_true", default=None,
                        help="Stage output in a temporary directory and move it into place")
    parser.add_argument("--dry-run", action="store_true", default=None,
                        help="Render all templates and show the tree without writing")
    parser.add_argument("--quiet", "-q", action="store_true", default=None,
                        help="Suppress progress output")
    parser.add_argument("--settings", default=None, metavar="FILE",
                        help="Load settings from a JSON file instead of the environment")
    parser.add_argument("--save-settings", default=None, metavar="FILE",
                        help="Write the resolved settings to a JSON file")

    return parser


def resolve_settings(opts: argparse.Namespace) -> ScaffoldSettings:
    """Base settings with any explicitly given CLI flags on top.

    The base is the ``--settings`` file when one is given, otherwise the
    environment.
    """
    if opts.settings:
        settings = ScaffoldSettings.load(Path(opts.settings))
    else:
        settings = ScaffoldSettings.from_env()
    overrides = {
        "output_dir": opts.output,
        "overwrite": opts.overwrite,
        "atomic": opts.atomic,
        "dry_run": opts.dry_run,
        "quiet": opts.quiet,
    }
    update = {key: value for key, value in overrides.items() if value is not None}
    return ScaffoldSettings.model_validate({**settings.model_dump(), **update})


def run_cli(args: list[str] | None = None) -> int:
    """Run the CLI with given arguments. Returns exit code."""
    parser = build_parser()
    opts = parser.parse_args(args)

    config = ProjectConfig(name=opts.name, module=opts.module)
    if config.missing_fields():
        print_error("Please provide both project name and module name")
        parser.print_help()
        return 1

    try:
        settings = resolve_settings(opts)
    except ValidationError as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1
    except OSError as exc:
        print_error(f"Cannot read settings file: {exc}")
        return 1

    if opts.save_settings:
        try:
            saved = settings.save(Path(opts.save_settings))
        except OSError as exc:
            print_error(f"Cannot write settings file: {exc}")
            return 1
        if not settings.quiet:
            console.print(Text(f"Settings saved to {saved}", style="dim"))

    if not settings.quiet:
        print_summary_table(
            {
                "Project": config.name,
                "Module": config.module,
                "Output": str(settings.output_dir / config.name),
                "Overwrite": settings.overwrite.value,
                "Atomic": "Yes" if settings.atomic else "No",
                "Dry run": "Yes" if settings.dry_run else "No",
            },
            title="cleanarch",
        )

    generator = ProjectGenerator(config, settings=settings)
    try:
        result = generator.generate()
    except ScaffoldError as exc:
        print_error(f"Error generating project: {exc}")
        return 1

    if not settings.quiet:
        _report(result)
    print_success(
        "Dry run complete, nothing was written." if result.dry_run
        else "Project generated successfully!"
    )
    return 0


def _report(result: GenerationResult) -> None:
    print_file_tree(result.root.name, result.files)
    if result.skipped:
        print_warning(f"Skipped {len(result.skipped)} existing file(s):")
        for path in result.skipped:
            console.print(f"  [yellow]- {escape(path)}[/yellow]")
    if result.overwritten:
        console.print(f"[dim]Overwrote {len(result.overwritten)} existing file(s)[/dim]")


def main() -> None:
    """Console-script entry point."""
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
