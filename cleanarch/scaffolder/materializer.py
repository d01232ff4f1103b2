"""Filesystem materialization for scaffolded projects.

The ``Materializer`` turns a directory plan and rendered file contents into
real filesystem entries under an explicit root.  Every path it accepts is
relative to that root; the process working directory is never consulted
or changed.

Failure policy is fail-fast: the first ``OSError`` is wrapped in a
``FileSystemError`` and raised, and whatever was created before it stays
on disk.
"""

from __future__ import annotations

import errno
from collections.abc import Iterable
from enum import Enum
from pathlib import Path, PurePosixPath

from cleanarch.config import OverwritePolicy

from .errors import FileSystemError


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class WriteOutcome(str, Enum):
    CREATED = "created"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"


# ---------------------------------------------------------------------------
# Materializer
# ---------------------------------------------------------------------------


class Materializer:
    """Creates directories and writes files beneath *root*.

    Args:
        root: The project root directory.  It is created by
            :meth:`create_root`; its parent must already exist.
        overwrite: Policy applied when a file to be written already exists.
    """

    def __init__(
        self,
        root: str | Path,
        overwrite: OverwritePolicy = OverwritePolicy.OVERWRITE,
    ) -> None:
        self.root = Path(root)
        self.overwrite = OverwritePolicy(overwrite)

    # -- Directories -------------------------------------------------------

    def create_root(self) -> Path:
        """Create the root directory.  An existing directory is accepted."""
        try:
            self.root.mkdir(exist_ok=True)
        except OSError as exc:
            raise FileSystemError("create project root", self.root, exc) from exc
        return self.root

    def create_directories(self, plan: Iterable[str]) -> list[Path]:
        """Create every planned directory in order, including parents.

        Existing directories are accepted.  The first failure aborts the
        remaining directories.

        Returns:
            The directories that were ensured, in plan order.
        """
        ensured: list[Path] = []
        for directory in plan:
            path = self.resolve(directory)
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise FileSystemError("create directory", path, exc) from exc
            ensured.append(path)
        return ensured

    # -- Files -------------------------------------------------------------

    def write_file(self, relative_path: str, content: str) -> WriteOutcome:
        """Write *content* to *relative_path*, creating or truncating it.

        The file handle is closed on every exit path, including a failed
        write.  Content is written as UTF-8 with no newline translation.
        """
        path = self.resolve(relative_path)
        existed = path.exists()
        if existed:
            if self.overwrite is OverwritePolicy.SKIP:
                return WriteOutcome.SKIPPED
            if self.overwrite is OverwritePolicy.ERROR:
                cause = FileExistsError(errno.EEXIST, "File exists", str(path))
                raise FileSystemError("write file", path, cause) from cause

        try:
            with path.open("w", encoding="utf-8", newline="") as fh:
                fh.write(content)
        except OSError as exc:
            raise FileSystemError("write file", path, exc) from exc
        return WriteOutcome.OVERWRITTEN if existed else WriteOutcome.CREATED

    # -- Utility -----------------------------------------------------------

    def resolve(self, relative_path: str) -> Path:
        """Map a slash-separated relative path onto the root."""
        return self.root.joinpath(*PurePosixPath(relative_path).parts)
