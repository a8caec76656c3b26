"""xp-provider-gen template engine.

Discovers the bundled Jinja2 templates, classifies them, builds configured
products for a project (and optionally a resource), and regenerates the
aggregator files that collect one entry per scaffolded resource.

Quick usage::

    from xpgen.config import ProjectConfig
    from xpgen.scaffolder import ResourceDescriptor, TemplateFactory

    config = ProjectConfig(module_path="github.com/acme/provider-acme", domain="acme.io")
    factory = TemplateFactory(config)
    resource = ResourceDescriptor(group="compute", version="v1alpha1", kind="Instance")
    for product in factory.resource_templates(resource):
        print(product.path)

The command-level orchestrators live in :mod:`xpgen.scaffolder.generator`.
"""

from xpgen.scaffolder.aggregators import AggregatorKind, AggregatorUpdater, render_aggregator
from xpgen.scaffolder.errors import (
    ExistingFileConflict,
    GeneratorError,
    ReadFailure,
    ResourceRequired,
    StoreUnavailable,
    TemplateNotFound,
    WriteFailure,
)
from xpgen.scaffolder.factory import TemplateFactory
from xpgen.scaffolder.filesystem import ProjectFilesystem
from xpgen.scaffolder.models import (
    ExistsPolicy,
    ResourceDescriptor,
    TemplateCategory,
    TemplateDescriptor,
    TemplateOptions,
)
from xpgen.scaffolder.products import TemplateProduct
from xpgen.scaffolder.templates import TemplateStore

__all__ = [
    "AggregatorKind",
    "AggregatorUpdater",
    "render_aggregator",
    "GeneratorError",
    "TemplateNotFound",
    "ResourceRequired",
    "StoreUnavailable",
    "ExistingFileConflict",
    "ReadFailure",
    "WriteFailure",
    "TemplateFactory",
    "ProjectFilesystem",
    "ExistsPolicy",
    "ResourceDescriptor",
    "TemplateCategory",
    "TemplateDescriptor",
    "TemplateOptions",
    "TemplateProduct",
    "TemplateStore",
]
