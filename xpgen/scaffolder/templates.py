"""Template Store: the bundled, read-only collection of Jinja2 templates.

The store owns the ``xpgen/scaffolder/templates/`` tree (or any directory
handed to it), enumerates it into :class:`TemplateDescriptor` values, serves
raw template bodies by their store-relative path, and renders bodies with a
shared Jinja2 environment.  One store is constructed per process and passed
to every builder; it holds no mutable registry beyond the Jinja2 cache.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from .classifier import TEMPLATE_SUFFIX, analyze_template_path
from .errors import DuplicateTemplateError, StoreUnavailable, TemplateNotFound, TemplateRenderError
from .models import TemplateDescriptor, TemplateType


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateStore
# ---------------------------------------------------------------------------


class TemplateStore:
    """Addressable collection of ``.j2`` template bodies.

    Templates are addressed by their path relative to the store root, e.g.
    ``apis/GROUP/VERSION/KIND_types.go.j2``.  The directory layout *is* the
    output layout: stripping the suffix (and the ``project/`` container)
    yields the output-path skeleton.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([], default_for_string=False),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    # -- Discovery ---------------------------------------------------------

    def discover(self) -> dict[TemplateType, TemplateDescriptor]:
        """Enumerate every template in the store.

        Walks the whole tree; the result is ordered by store-relative path so
        repeated calls against an unchanged store are identical.

        Raises:
            StoreUnavailable: If the store root is missing or unreadable.
            DuplicateTemplateError: If two templates derive the same identifier.
        """
        if not self.template_dir.is_dir():
            raise StoreUnavailable(
                f"Template store not found: {self.template_dir}",
                path=str(self.template_dir),
            )

        try:
            files = sorted(
                p.relative_to(self.template_dir).as_posix()
                for p in self.template_dir.rglob(f"*{TEMPLATE_SUFFIX}")
                if p.is_file()
            )
        except OSError as exc:
            raise StoreUnavailable(
                f"Cannot enumerate template store: {exc}",
                path=str(self.template_dir),
            ) from exc

        descriptors: dict[TemplateType, TemplateDescriptor] = {}
        for source_path in files:
            info = analyze_template_path(source_path)
            previous = descriptors.get(info.identifier)
            if previous is not None:
                raise DuplicateTemplateError(
                    f"Templates {previous.source_path} and {source_path} "
                    "derive the same identifier",
                    template_type=info.identifier,
                    path=source_path,
                )
            descriptors[info.identifier] = info
        return descriptors

    # -- Body access -------------------------------------------------------

    def read(self, source_path: str) -> str:
        """Return the raw body of the template at *source_path*."""
        path = self.template_dir / source_path
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise TemplateNotFound(
                f"Template file missing from store: {source_path}", path=source_path
            ) from exc
        except OSError as exc:
            raise StoreUnavailable(
                f"Cannot read template {source_path}: {exc}", path=source_path
            ) from exc

    def exists(self, source_path: str) -> bool:
        return (self.template_dir / source_path).is_file()

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob(f"*{TEMPLATE_SUFFIX}")
        )

    # -- Rendering ---------------------------------------------------------

    def render_string(
        self,
        template_string: str,
        context: dict[str, Any],
        template_type: str = "",
    ) -> str:
        """Render a template body with the provided context."""
        try:
            template = self.env.from_string(template_string)
            return template.render(**context)
        except TemplateError as exc:
            raise TemplateRenderError(
                f"Failed to render template: {exc}", template_type=template_type
            ) from exc
