"""Template products: configured, path-resolved, ready-to-render templates.

A product is created by a builder and then walked through a fixed
lifecycle::

    product.configure(config)          # module path, domain, names, boilerplate
    product.set_resource(resource)     # per-resource products only
    product.set_force(True)            # optional
    product.set_custom_data({...})     # optional
    product.set_template_defaults()    # resolves path and body

after which :meth:`TemplateProduct.render` produces the file content and
:attr:`TemplateProduct.exists_policy` tells the writer whether an existing
target may be replaced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from .models import ExistsPolicy, ResourceDescriptor, TemplateDescriptor, TemplateType
from .templates import TemplateStore

if TYPE_CHECKING:
    from xpgen.config import ProjectConfig, ToolchainConfig


class TemplateProduct:
    """One renderable file produced from a stored template."""

    def __init__(
        self,
        template_type: TemplateType,
        descriptor: TemplateDescriptor,
        store: TemplateStore,
        output_path: str,
    ) -> None:
        self.template_type = template_type
        self.descriptor = descriptor
        self.store = store
        self.output_path = output_path

        self.path = ""
        self.body = ""
        self.exists_policy = ExistsPolicy.ERROR
        self.force = False
        self.resource: Optional[ResourceDescriptor] = None
        self.custom_data: dict[str, Any] = {}

        self.repo = ""
        self.domain = ""
        self.project_name = ""
        self.provider_name = ""
        self.boilerplate = ""
        self.toolchain: Optional[ToolchainConfig] = None

    def __repr__(self) -> str:
        return f"TemplateProduct({self.template_type!r}, path={self.path or self.output_path!r})"

    # -- Lifecycle ---------------------------------------------------------

    def configure(self, config: ProjectConfig) -> None:
        """Bind project-level values from *config*."""
        self.repo = config.module_path
        self.domain = config.domain
        self.project_name = config.derived_project_name
        self.provider_name = config.provider_name
        self.boilerplate = config.boilerplate
        self.toolchain = config.toolchain

    def set_resource(self, resource: Optional[ResourceDescriptor]) -> None:
        if resource is not None:
            self.resource = resource

    def set_force(self, force: bool) -> None:
        self.force = force
        self.exists_policy = ExistsPolicy.OVERWRITE if force else ExistsPolicy.ERROR

    def set_custom_data(self, data: dict[str, Any]) -> None:
        self.custom_data = dict(data)

    def set_template_defaults(self) -> None:
        """Resolve the final path and load the body from the store.

        Safe to call more than once: an explicitly assigned path is kept and
        the body is simply reloaded.
        """
        if not self.path:
            self.path = self.output_path
        self.body = self.store.read(self.descriptor.source_path)

    # -- Rendering ---------------------------------------------------------

    def context(self) -> dict[str, Any]:
        """The Jinja2 context this product renders with."""
        context: dict[str, Any] = {
            "boilerplate": self.boilerplate,
            "repo": self.repo,
            "domain": self.domain,
            "project_name": self.project_name,
            "provider_name": self.provider_name,
            "toolchain": self.toolchain,
            "resource": self.resource,
            "force": self.force,
        }
        context.update(self.custom_data)
        return context

    def render(self) -> str:
        if not self.body:
            self.set_template_defaults()
        return self.store.render_string(
            self.body, self.context(), template_type=self.template_type
        )
