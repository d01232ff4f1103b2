"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` (project name + module path) and materializes the
registered template set under ``<output_dir>/<name>``:

    validate -> create root -> create directories -> render + write each file

The root is threaded explicitly through every filesystem call; the process
working directory is never changed, so independent generators can run
concurrently in one process.
"""

from __future__ import annotations

import asyncio
import errno
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from cleanarch.config import OverwritePolicy, ScaffoldSettings

from .errors import FileSystemError, MissingArgumentError, ScaffoldError
from .materializer import Materializer, WriteOutcome
from .registry import TemplateRegistry, default_registry
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """The two parameters substituted into every template.

    Emptiness is checked by :meth:`ProjectGenerator.generate`, not at
    construction, so an empty value is reported as ``MissingArgumentError``
    before anything touches the filesystem.
    """

    name: str = Field(default="", description="Project name, used as the output root directory")
    module: str = Field(default="", description="Module/import path embedded verbatim in output")

    def missing_fields(self) -> list[str]:
        """Return the names of the parameters that are empty."""
        return [
            label
            for label, value in (("name", self.name), ("module", self.module))
            if not value
        ]

    def as_context(self) -> dict[str, str]:
        """Template context keyed by marker field name."""
        return {"Name": self.name, "Module": self.module}


# ---------------------------------------------------------------------------
# Run state and result
# ---------------------------------------------------------------------------


class GenerationState(str, Enum):
    PENDING = "pending"
    VALIDATING = "validating"
    ROOT_CREATED = "root_created"
    DIRECTORIES_CREATED = "directories_created"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """What a generation run produced (or, for a dry run, would produce)."""

    root: Path
    directories: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    overwritten: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    dry_run: bool = False

    def record(self, path: str, outcome: WriteOutcome) -> None:
        self.files.append(path)
        {
            WriteOutcome.CREATED: self.created,
            WriteOutcome.OVERWRITTEN: self.overwritten,
            WriteOutcome.SKIPPED: self.skipped,
        }[outcome].append(path)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Sequences validation, directory creation and file writing.

    Args:
        config: The project parameters.
        registry: Templates and directory plan to materialize.  Defaults to
            the shipped Go clean-architecture registry.
        renderer: Marker renderer.  Defaults to a fresh ``TemplateRenderer``.
        settings: Overwrite policy, atomic staging, dry-run and output dir.

    Attributes:
        state: Current ``GenerationState``.
        index: Index of the registry entry being written (``WRITING``).
        failure: The error that moved the run to ``FAILED``, if any.
    """

    def __init__(
        self,
        config: ProjectConfig,
        registry: TemplateRegistry | None = None,
        renderer: TemplateRenderer | None = None,
        settings: ScaffoldSettings | None = None,
    ) -> None:
        self.config = config
        self.registry = registry if registry is not None else default_registry()
        self.renderer = renderer or TemplateRenderer()
        self.settings = settings or ScaffoldSettings()
        self.state = GenerationState.PENDING
        self.index: int | None = None
        self.failure: ScaffoldError | None = None

    # -- Public API --------------------------------------------------------

    def generate(self, output_dir: str | Path | None = None) -> GenerationResult:
        """Generate the project tree.

        Args:
            output_dir: Parent directory where the project folder is
                created.  Defaults to ``settings.output_dir``.

        Returns:
            A ``GenerationResult`` describing the written tree.

        Raises:
            MissingArgumentError: If the name or module is empty.  Nothing
                is created.
            FileSystemError: If a directory or file cannot be created.  In
                direct mode everything written before the failure is left
                in place.
            TemplateSyntaxError: If a registered template is malformed.
        """
        self.failure = None
        self.index = None
        parent = Path(output_dir) if output_dir is not None else self.settings.output_dir
        try:
            self.state = GenerationState.VALIDATING
            missing = self.config.missing_fields()
            if missing:
                raise MissingArgumentError(missing)

            root = parent / self.config.name
            if self.settings.dry_run:
                result = self._dry_run(root)
            elif self.settings.atomic:
                result = self._generate_staged(root)
            else:
                result = self._generate_direct(root)
        except ScaffoldError as exc:
            self.failure = exc
            self.state = GenerationState.FAILED
            raise

        self.state = GenerationState.DONE
        return result

    async def agenerate(self, output_dir: str | Path | None = None) -> GenerationResult:
        """Run :meth:`generate` in a worker thread."""
        return await asyncio.to_thread(self.generate, output_dir)

    # -- Strategies --------------------------------------------------------

    def _generate_direct(self, root: Path) -> GenerationResult:
        """Fail-fast generation straight into *root*, rendering file by file."""
        materializer = Materializer(root, self.settings.overwrite)
        result = GenerationResult(root=root)

        materializer.create_root()
        self.state = GenerationState.ROOT_CREATED

        materializer.create_directories(self.registry.plan())
        result.directories = list(self.registry.plan())
        self.state = GenerationState.DIRECTORIES_CREATED

        context = self.config.as_context()
        for i, entry in enumerate(self.registry):
            self.index = i
            self.state = GenerationState.WRITING
            content = self.renderer.render(entry.body, context, name=entry.path)
            result.record(entry.path, materializer.write_file(entry.path, content))
        return result

    def _generate_staged(self, root: Path) -> GenerationResult:
        """Render everything, build the tree in a staging directory, then move it.

        A failure before the final move leaves nothing at *root*.
        """
        rendered = self._render_all()
        policy = self.settings.overwrite
        root_exists = root.exists()
        if root_exists and not root.is_dir():
            cause = FileExistsError(errno.EEXIST, "File exists", str(root))
            raise FileSystemError("create project root", root, cause) from cause
        if root_exists and policy is OverwritePolicy.ERROR:
            for path, _ in rendered:
                target = Materializer(root).resolve(path)
                if target.exists():
                    cause = FileExistsError(errno.EEXIST, "File exists", str(target))
                    raise FileSystemError("write file", target, cause) from cause

        try:
            staging = tempfile.TemporaryDirectory(
                prefix=f".{self.config.name}-", dir=root.parent
            )
        except OSError as exc:
            raise FileSystemError("create staging directory", root.parent, exc) from exc

        with staging as tmp:
            stage = Materializer(Path(tmp) / self.config.name)
            stage.create_root()
            self.state = GenerationState.ROOT_CREATED
            stage.create_directories(self.registry.plan())
            self.state = GenerationState.DIRECTORIES_CREATED
            for i, (path, content) in enumerate(rendered):
                self.index = i
                self.state = GenerationState.WRITING
                stage.write_file(path, content)

            result = GenerationResult(root=root, directories=list(self.registry.plan()))
            if not root_exists:
                _move(stage.root, root)
                for path, _ in rendered:
                    result.record(path, WriteOutcome.CREATED)
                return result

            final = Materializer(root, policy)
            final.create_directories(self.registry.plan())
            for path, _ in rendered:
                target = final.resolve(path)
                if target.exists():
                    if policy is OverwritePolicy.SKIP:
                        result.record(path, WriteOutcome.SKIPPED)
                        continue
                    outcome = WriteOutcome.OVERWRITTEN
                else:
                    outcome = WriteOutcome.CREATED
                _move(stage.resolve(path), target)
                result.record(path, outcome)
        return result

    def _dry_run(self, root: Path) -> GenerationResult:
        """Validate and render every template without touching the filesystem."""
        result = GenerationResult(
            root=root, directories=list(self.registry.plan()), dry_run=True
        )
        for path, _ in self._render_all():
            result.files.append(path)
        return result

    # -- Internal helpers --------------------------------------------------

    def _render_all(self) -> list[tuple[str, str]]:
        context = self.config.as_context()
        return [
            (entry.path, self.renderer.render(entry.body, context, name=entry.path))
            for entry in self.registry
        ]


def generate_project(
    name: str,
    module: str,
    output_dir: str | Path = ".",
    *,
    registry: TemplateRegistry | None = None,
    settings: ScaffoldSettings | None = None,
) -> GenerationResult:
    """Convenience wrapper: build a ``ProjectGenerator`` and run it once."""
    generator = ProjectGenerator(
        ProjectConfig(name=name, module=module), registry=registry, settings=settings
    )
    return generator.generate(output_dir)


def _move(source: Path, target: Path) -> None:
    try:
        os.replace(source, target)
    except OSError as exc:
        raise FileSystemError("move staged output", target, exc) from exc
