"""Error taxonomy for the scaffolding engine.

Every error is fatal to the current generation run and propagates to the
caller unchanged.  ``ScaffoldError`` is the common base so front-ends can
report any failure with a single ``except`` clause.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every failure raised while generating a project."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class MissingArgumentError(ScaffoldError):
    """Raised when one or both project parameters are empty."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(
            "validate parameters",
            f"missing required value(s): {', '.join(self.fields)}",
        )


class FileSystemError(ScaffoldError):
    """Raised when creating a directory or writing a file fails.

    The underlying ``OSError`` is kept on ``cause`` and chained via
    ``raise ... from``.
    """

    def __init__(self, operation: str, path: str | Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(operation, f"{self.path}: {reason}")


class TemplateSyntaxError(ScaffoldError):
    """Raised for a malformed or unresolvable placeholder marker."""

    def __init__(self, template: str, message: str, lineno: int | None = None) -> None:
        self.template = template
        self.lineno = lineno
        where = f"{template}:{lineno}" if lineno else template
        super().__init__("render template", f"{where}: {message}")
