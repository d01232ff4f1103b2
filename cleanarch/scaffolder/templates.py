"""Jinja2 placeholder rendering for project scaffolding.

Provides the TemplateRenderer class, which substitutes ``{{.Field}}``
markers inside template bodies with literal parameter values.

The body is first split into literal text and markers by a strict scan:
every ``{{.`` must open exactly ``{{.Field}}`` with no whitespace, trim
signs, filters or attribute lookups.  Literal text is spliced back into
the output untouched, so line endings and whitespace survive as-is.  Each
marker is rendered through a one-marker Jinja2 template compiled once per
field.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

import jinja2
from jinja2 import Environment, StrictUndefined

from .errors import TemplateSyntaxError


# ---------------------------------------------------------------------------
# Marker syntax
# ---------------------------------------------------------------------------

MARKER_PREFIX = "{{."
MARKER_SUFFIX = "}}"

TEMPLATE_FIELDS: tuple[str, ...] = ("Name", "Module")

_MARKER_RE = re.compile(r"\{\{\.(\w+)\}\}")

# A parsed body: literal text (field None) or a marker (text is the raw marker).
Segment = tuple[str, "str | None"]


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders template bodies containing ``{{.Field}}`` markers.

    The renderer is stateless apart from its compiled marker templates, so
    one instance can be shared by any number of generators.
    """

    def __init__(self, fields: Iterable[str] = TEMPLATE_FIELDS) -> None:
        self.fields = frozenset(fields)
        self.env = Environment(
            variable_start_string=MARKER_PREFIX,
            variable_end_string=MARKER_SUFFIX,
            autoescape=False,
            undefined=StrictUndefined,
        )
        self._markers = {
            field: self.env.from_string(f"{MARKER_PREFIX}{field}{MARKER_SUFFIX}")
            for field in self.fields
        }

    # -- Rendering ---------------------------------------------------------

    def render(
        self,
        body: str,
        params: Mapping[str, str],
        name: str = "<template>",
    ) -> str:
        """Render *body* with the values in *params*.

        Args:
            body: Template text containing zero or more markers.
            params: Mapping of field name (``Name``, ``Module``) to value.
            name: Template name used in error messages.

        Returns:
            The rendered text.

        Raises:
            TemplateSyntaxError: If a marker is malformed, names an unknown
                field, or is left unresolved in the output.
        """
        segments = self._split(body, name)

        missing = sorted({f for _, f in segments if f is not None} - set(params))
        if missing:
            raise TemplateSyntaxError(name, f"no value supplied for {', '.join(missing)}")

        values = {key: str(value) for key, value in params.items()}
        parts: list[str] = []
        for text, field in segments:
            if field is None:
                parts.append(text)
                continue
            try:
                parts.append(self._markers[field].render(**values))
            except jinja2.TemplateError as exc:
                raise TemplateSyntaxError(name, exc.message or str(exc)) from exc
        rendered = "".join(parts)

        if MARKER_PREFIX in rendered and not any(
            MARKER_PREFIX in value for value in values.values()
        ):
            raise TemplateSyntaxError(name, "unresolved placeholder marker in output")
        return rendered

    # -- Inspection --------------------------------------------------------

    def find_fields(self, body: str) -> set[str]:
        """Return the set of field names referenced by markers in *body*."""
        return {f for _, f in self._split(body, "<template>") if f is not None}

    def count_markers(self, body: str, field: str) -> int:
        """Return how many markers in *body* reference *field*."""
        return sum(1 for _, f in self._split(body, "<template>") if f == field)

    # -- Internal helpers --------------------------------------------------

    def _split(self, body: str, name: str) -> list[Segment]:
        """Split *body* into literal text and validated markers."""
        segments: list[Segment] = []
        pos = 0
        while True:
            start = body.find(MARKER_PREFIX, pos)
            if start == -1:
                break
            lineno = body.count("\n", 0, start) + 1
            match = _MARKER_RE.match(body, start)
            if match is None:
                raise TemplateSyntaxError(
                    name, "a marker must name exactly one field as {{.Field}}", lineno
                )
            field = match.group(1)
            if field not in self.fields:
                raise TemplateSyntaxError(name, f"unknown field {field!r}", lineno)
            if start > pos:
                segments.append((body[pos:start], None))
            segments.append((match.group(0), field))
            pos = match.end()
        if pos < len(body):
            segments.append((body[pos:], None))
        return segments
