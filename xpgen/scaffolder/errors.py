"""Exceptions raised by the template-production engine.

Every error carries the template type and target path it concerns (when
known) plus optional user-facing hints, so the command layer can print an
actionable message without re-deriving the context.
"""

from __future__ import annotations

from collections.abc import Iterable


class GeneratorError(Exception):
    """Base class for all engine failures."""

    def __init__(
        self,
        message: str,
        template_type: str = "",
        path: str = "",
        hints: Iterable[str] = (),
    ) -> None:
        self.message = message
        self.template_type = template_type
        self.path = str(path) if path else ""
        self.hints = list(hints)
        super().__init__(self._format())

    def _format(self) -> str:
        context = []
        if self.template_type:
            context.append(f"type={self.template_type}")
        if self.path:
            context.append(f"path={self.path}")
        text = self.message
        if context:
            text += f" [{', '.join(context)}]"
        if self.hints:
            text += "\n\nSuggestions:"
            for hint in self.hints:
                text += f"\n  - {hint}"
        return text


class TemplateNotFound(GeneratorError):
    """No descriptor matches the requested type identifier."""


class ResourceRequired(GeneratorError):
    """A per-resource template was requested without a resource descriptor."""


class StoreUnavailable(GeneratorError):
    """The template namespace could not be enumerated or read."""


class DuplicateTemplateError(GeneratorError):
    """Two stored templates map to the same type identifier."""


class ExistingFileConflict(GeneratorError):
    """A product with the ``error`` policy targets a file that already exists."""

    def __init__(self, path: str, template_type: str = "") -> None:
        super().__init__(
            "Refusing to overwrite existing file",
            template_type=template_type,
            path=path,
            hints=["Use --force to overwrite existing files"],
        )


class ReadFailure(GeneratorError):
    """An existing file could not be read (anything other than not-found)."""


class WriteFailure(GeneratorError):
    """A rendered product could not be written."""


class TemplateRenderError(GeneratorError):
    """Jinja2 failed to render a template body."""
