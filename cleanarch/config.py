"""cleanarch configuration.

Typed settings for a scaffolding run.  Settings use a Pydantic v2 model so
they are validated at construction time and can be serialised to/from JSON
or read from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_TRUE_VALUES = {"1", "true", "yes", "on"}


class OverwritePolicy(str, Enum):
    """What to do when a target file already exists."""

    OVERWRITE = "overwrite"
    SKIP = "skip"
    ERROR = "error"


class ScaffoldSettings(BaseModel):
    """Options controlling how a project tree is materialized.

    The project parameters themselves (name and module) are not settings;
    they live on ``ProjectConfig``.
    """

    output_dir: Path = Field(
        default=Path("."), description="Parent directory the project root is created in"
    )
    overwrite: OverwritePolicy = Field(
        default=OverwritePolicy.OVERWRITE,
        description="What to do with files that already exist at a target path",
    )
    atomic: bool = Field(
        default=False,
        description="Stage the whole tree in a temporary directory and move it into place",
    )
    dry_run: bool = Field(default=False, description="Render everything but write nothing")
    quiet: bool = Field(default=False, description="Suppress progress output")

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldSettings":
        """Load previously-saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldSettings":
        """Build ``ScaffoldSettings`` from environment variables.

        Recognised variables (all optional):
            CLEANARCH_OUTPUT_DIR, CLEANARCH_OVERWRITE, CLEANARCH_ATOMIC,
            CLEANARCH_DRY_RUN, CLEANARCH_QUIET.

        Raises:
            pydantic.ValidationError: If ``CLEANARCH_OVERWRITE`` is not one of
                ``overwrite``, ``skip`` or ``error``.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CLEANARCH_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CLEANARCH_OUTPUT_DIR"])
        if os.environ.get("CLEANARCH_OVERWRITE"):
            kwargs["overwrite"] = os.environ["CLEANARCH_OVERWRITE"].strip().lower()
        for name in ("atomic", "dry_run", "quiet"):
            raw = os.environ.get(f"CLEANARCH_{name.upper()}")
            if raw:
                kwargs[name] = raw.strip().lower() in _TRUE_VALUES
        return cls(**kwargs)
