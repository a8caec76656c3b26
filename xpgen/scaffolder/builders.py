"""Per-category template builders.

Each builder turns one type identifier plus a :class:`TemplateOptions` into a
fully configured :class:`TemplateProduct`:

1. locate the descriptor of the builder's category with that identifier,
2. compute the path substitutions (project name always; group, version and
   kind for per-resource templates),
3. instantiate the product and walk it through its lifecycle.

Nothing here writes to disk; the only I/O is reading the template body from
the store.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from .errors import ResourceRequired, TemplateNotFound
from .models import TemplateCategory, TemplateDescriptor, TemplateOptions, TemplateType
from .paths import GROUP_TOKEN, IMAGE_NAME_TOKEN, KIND_TOKEN, VERSION_TOKEN, render_path
from .products import TemplateProduct
from .templates import TemplateStore

if TYPE_CHECKING:
    from xpgen.config import ProjectConfig


def coerce_options(options: Optional[TemplateOptions] = None, **kwargs: Any) -> TemplateOptions:
    """Merge an options object with keyword overrides (``force=``, ``resource=``...)."""
    if options is None:
        return TemplateOptions(**kwargs)
    if kwargs:
        return options.model_copy(update=kwargs)
    return options


def configure_product(
    product: TemplateProduct, config: ProjectConfig, options: TemplateOptions
) -> TemplateProduct:
    """Run the product lifecycle in its fixed order."""
    product.configure(config)
    if options.resource is not None:
        product.set_resource(options.resource)
    if options.force:
        product.set_force(True)
    if options.custom_data:
        product.set_custom_data(options.custom_data)
    product.set_template_defaults()
    return product


class TemplateBuilder:
    """Builds products of one type identifier within one category."""

    category: TemplateCategory = TemplateCategory.PROJECT_WIDE

    def __init__(
        self,
        template_type: TemplateType,
        store: TemplateStore,
        descriptors: Optional[Mapping[TemplateType, TemplateDescriptor]] = None,
    ) -> None:
        self.template_type = template_type
        self.store = store
        self._descriptors = descriptors

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.template_type!r})"

    def find_descriptor(self) -> TemplateDescriptor:
        descriptors = self._descriptors if self._descriptors is not None else self.store.discover()
        info = descriptors.get(self.template_type)
        if info is None or info.category != self.category:
            raise TemplateNotFound(
                f"No {self.category.value} template registered for this type",
                template_type=self.template_type,
            )
        return info

    def replacements(self, config: ProjectConfig, options: TemplateOptions) -> dict[str, str]:
        return {IMAGE_NAME_TOKEN: config.derived_project_name}

    def build(
        self,
        config: ProjectConfig,
        options: Optional[TemplateOptions] = None,
        **kwargs: Any,
    ) -> TemplateProduct:
        """Build a configured product.

        Raises:
            TemplateNotFound: The store has no matching template.
            ResourceRequired: A per-resource template was built without a resource.
        """
        options = coerce_options(options, **kwargs)
        info = self.find_descriptor()
        substitutions = self.replacements(config, options)
        product = TemplateProduct(
            self.template_type,
            info,
            self.store,
            render_path(info.output_pattern, substitutions),
        )
        return configure_product(product, config, options)


class ProjectTemplateBuilder(TemplateBuilder):
    """Project-wide templates, rendered once at ``init``."""

    category = TemplateCategory.PROJECT_WIDE


class ResourceTemplateBuilder(TemplateBuilder):
    """Per-resource templates; a resource descriptor is mandatory."""

    category = TemplateCategory.PER_RESOURCE

    def replacements(self, config: ProjectConfig, options: TemplateOptions) -> dict[str, str]:
        resource = options.resource
        if resource is None:
            raise ResourceRequired(
                "A resource is required for per-resource templates",
                template_type=self.template_type,
                hints=["Pass --group, --version and --kind"],
            )
        substitutions = super().replacements(config, options)
        substitutions.update({
            GROUP_TOKEN: resource.group_lower,
            VERSION_TOKEN: resource.version,
            KIND_TOKEN: resource.kind_lower,
        })
        return substitutions


class StaticTemplateBuilder(TemplateBuilder):
    """One-off files; resource tokens are bound when a resource is given."""

    category = TemplateCategory.STATIC

    def replacements(self, config: ProjectConfig, options: TemplateOptions) -> dict[str, str]:
        substitutions = super().replacements(config, options)
        resource = options.resource
        if resource is not None:
            substitutions.update({
                GROUP_TOKEN: resource.group_lower,
                VERSION_TOKEN: resource.version,
                KIND_TOKEN: resource.kind_lower,
            })
        return substitutions


BUILDER_CLASSES: dict[TemplateCategory, type[TemplateBuilder]] = {
    TemplateCategory.PROJECT_WIDE: ProjectTemplateBuilder,
    TemplateCategory.PER_RESOURCE: ResourceTemplateBuilder,
    TemplateCategory.STATIC: StaticTemplateBuilder,
}
