"""Template registry and directory plan.

A ``TemplateRegistry`` is an immutable, ordered collection of
``TemplateEntry`` values together with the ``DirectoryPlan`` that must
exist before any entry is written.  Registries are built once and injected
into ``ProjectGenerator``; changing what gets scaffolded means building a
different registry, never touching the engine.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path, PurePosixPath
from types import MappingProxyType


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates" / "go-clean-api"

# (output path, template file) in declaration order.
DEFAULT_ENTRIES: tuple[tuple[str, str], ...] = (
    ("cmd/api/main.go", "main.go.j2"),
    ("internal/domain/user.go", "user_domain.go.j2"),
    ("internal/usecase/user_usecase.go", "user_usecase.go.j2"),
    ("internal/repository/user_repository.go", "user_repository.go.j2"),
    ("internal/handler/user_handler.go", "user_handler.go.j2"),
    ("pkg/config/config.go", "config.go.j2"),
    ("pkg/database/mongodb.go", "mongodb.go.j2"),
    ("pkg/auth/jwt.go", "jwt.go.j2"),
    ("go.mod", "go.mod.j2"),
    (".env", "dotenv.j2"),
)

DEFAULT_DIRECTORIES: tuple[str, ...] = (
    "cmd/api",
    "internal/domain",
    "internal/usecase",
    "internal/repository",
    "internal/handler",
    "pkg/config",
    "pkg/database",
    "pkg/auth",
)


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateEntry:
    """A static pair of output path (relative, slash-separated) and body."""

    path: str
    body: str

    def __post_init__(self) -> None:
        _check_relative(self.path, "template path")


DirectoryPlan = tuple[str, ...]


class TemplateRegistry:
    """Immutable, ordered set of templates plus the directories they need.

    Raises ``ValueError`` on construction if an entry path is absolute,
    escapes the root, is duplicated, or lives in a directory the plan does
    not cover.
    """

    __slots__ = ("_entries", "_by_path", "_directories")

    def __init__(
        self,
        entries: Iterable[TemplateEntry],
        directories: Iterable[str],
    ) -> None:
        entries = tuple(entries)
        directories = tuple(directories)
        for directory in directories:
            _check_relative(directory, "directory")

        by_path: dict[str, TemplateEntry] = {}
        for entry in entries:
            if entry.path in by_path:
                raise ValueError(f"duplicate template path: {entry.path}")
            by_path[entry.path] = entry

        covered = _with_parents(directories)
        for entry in entries:
            parent = str(PurePosixPath(entry.path).parent)
            if parent != "." and parent not in covered:
                raise ValueError(
                    f"directory {parent!r} for {entry.path} is missing from the plan"
                )

        object.__setattr__(self, "_entries", entries)
        object.__setattr__(self, "_by_path", MappingProxyType(by_path))
        object.__setattr__(self, "_directories", directories)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("TemplateRegistry is immutable")

    # -- Accessors ---------------------------------------------------------

    @property
    def entries(self) -> tuple[TemplateEntry, ...]:
        """All entries in declaration order."""
        return self._entries

    @property
    def paths(self) -> Mapping[str, TemplateEntry]:
        """Read-only ``{relative path: entry}`` lookup."""
        return self._by_path

    def plan(self) -> DirectoryPlan:
        """Return the ordered directories to create before writing files."""
        return self._directories

    def get(self, path: str) -> TemplateEntry:
        return self._by_path[path]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._by_path

    def __repr__(self) -> str:
        return f"TemplateRegistry({len(self._entries)} entries, {len(self._directories)} directories)"

    # -- Construction helpers ----------------------------------------------

    @classmethod
    def from_directory(
        cls,
        template_dir: str | Path,
        entries: Iterable[tuple[str, str]],
        directories: Iterable[str],
    ) -> "TemplateRegistry":
        """Load template bodies from *template_dir*.

        Args:
            template_dir: Directory holding the template files.
            entries: ``(output path, template file)`` pairs in the order the
                files should be written.
            directories: The directory plan.
        """
        base = Path(template_dir)
        loaded = [
            TemplateEntry(output, _read_template(base / filename))
            for output, filename in entries
        ]
        return cls(loaded, directories)


@lru_cache(maxsize=1)
def default_registry() -> TemplateRegistry:
    """The shipped Go clean-architecture API registry, loaded once."""
    return TemplateRegistry.from_directory(
        _DEFAULT_TEMPLATE_DIR, DEFAULT_ENTRIES, DEFAULT_DIRECTORIES
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _read_template(path: Path) -> str:
    # newline="" keeps the file's line endings intact.
    with path.open("r", encoding="utf-8", newline="") as fh:
        return fh.read()


def _check_relative(path: str, what: str) -> None:
    pure = PurePosixPath(path)
    if not path or pure.is_absolute() or "\\" in path or ".." in pure.parts or path.startswith("./"):
        raise ValueError(f"invalid {what}: {path!r}")


def _with_parents(directories: Iterable[str]) -> set[str]:
    covered: set[str] = set()
    for directory in directories:
        pure = PurePosixPath(directory)
        covered.add(str(pure))
        covered.update(str(parent) for parent in pure.parents if str(parent) != ".")
    return covered
