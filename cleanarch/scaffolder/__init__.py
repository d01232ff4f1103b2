"""cleanarch scaffolder -- materializes a parameterised project tree.

This module takes a ``ProjectConfig`` (project name + module path) and a
``TemplateRegistry`` and writes the registered directories and files under
``<output_dir>/<name>``, substituting ``{{.Name}}`` / ``{{.Module}}``
markers along the way.

Quick usage::

    from cleanarch.scaffolder import ProjectConfig, ProjectGenerator

    config = ProjectConfig(name="shop", module="example.com/org/shop")
    generator = ProjectGenerator(config)
    result = generator.generate("/tmp/output")
"""

from cleanarch.scaffolder.errors import (
    FileSystemError,
    MissingArgumentError,
    ScaffoldError,
    TemplateSyntaxError,
)
from cleanarch.scaffolder.generator import (
    GenerationResult,
    GenerationState,
    ProjectConfig,
    ProjectGenerator,
    generate_project,
)
from cleanarch.scaffolder.materializer import Materializer, WriteOutcome
from cleanarch.scaffolder.registry import TemplateEntry, TemplateRegistry, default_registry
from cleanarch.scaffolder.templates import TemplateRenderer

__all__ = [
    "FileSystemError",
    "GenerationResult",
    "GenerationState",
    "Materializer",
    "MissingArgumentError",
    "ProjectConfig",
    "ProjectGenerator",
    "ScaffoldError",
    "TemplateEntry",
    "TemplateRegistry",
    "TemplateRenderer",
    "TemplateSyntaxError",
    "WriteOutcome",
    "default_registry",
    "generate_project",
]
