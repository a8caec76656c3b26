"""Template factory: one builder per discovered template, grouped by category.

The factory discovers the store once at construction, registers a builder
for every descriptor under its category, and hands out configured products
by type identifier or by short alias::

    factory = TemplateFactory(config)
    go_mod = factory.build(factory.find_type("gomod"))
    types = factory.create_resource_template(
        factory.find_type("apitypes"), resource=resource, force=True
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from .builders import BUILDER_CLASSES, TemplateBuilder
from .errors import TemplateNotFound
from .models import (
    ResourceDescriptor,
    TemplateCategory,
    TemplateDescriptor,
    TemplateOptions,
    TemplateType,
)
from .products import TemplateProduct
from .templates import TemplateStore

if TYPE_CHECKING:
    from xpgen.config import ProjectConfig


# Short names used by the scaffolders -> identifier stem (without "Type").
TEMPLATE_ALIASES: dict[str, str] = {
    "gomod": "ProjectGoMod",
    "makefile": "ProjectMakefile",
    "readme": "ProjectReadmeMd",
    "gitignore": "ProjectGitignore",
    "gitmodules": "ProjectGitmodules",
    "maingo": "CmdProviderMainGo",
    "apis": "ApisRegisterGo",
    "generatego": "ApisGenerateGo",
    "docgo": "ApisV1alpha1DocGo",
    "providerconfigtypes": "ApisV1alpha1TypesGo",
    "providerconfigregister": "ApisV1alpha1RegisterGo",
    "boilerplate": "HackBoilerplateGoTxt",
    "crossplanepackage": "PackageCrossplaneYaml",
    "configcontroller": "InternalControllerConfigConfigGo",
    "controllerregister": "InternalControllerRegisterGo",
    "versiongo": "InternalVersionVersionGo",
    "clusterdockerfile": "ClusterImagesImageNameDockerfile",
    "clustermakefile": "ClusterImagesImageNameMakefile",
    "examplesproviderconfig": "ExamplesProviderConfigYaml",
    "license": "License",
    "apitypes": "ApisGroupVersionKindTypesGo",
    "apigroup": "ApisGroupVersionGroupversionInfoGo",
    "controller": "InternalControllerKindControllerGo",
    "examplesmanagedresource": "ExamplesGroupKindYaml",
}


class TemplateFactory:
    """Creates template products for a single project configuration."""

    def __init__(self, config: ProjectConfig, store: Optional[TemplateStore] = None) -> None:
        self.config = config
        self.store = store or TemplateStore()
        self.descriptors: dict[TemplateType, TemplateDescriptor] = self.store.discover()
        self._registries: dict[TemplateCategory, dict[TemplateType, TemplateBuilder]] = {
            category: {} for category in TemplateCategory
        }
        for template_type, info in self.descriptors.items():
            builder_cls = BUILDER_CLASSES[info.category]
            self._registries[info.category][template_type] = builder_cls(
                template_type, self.store, self.descriptors
            )

    # -- Single products ---------------------------------------------------

    def build(
        self,
        template_type: TemplateType,
        options: Optional[TemplateOptions] = None,
        **kwargs: Any,
    ) -> TemplateProduct:
        """Build *template_type* with whichever builder owns its category."""
        info = self.descriptors.get(template_type)
        if info is None:
            raise TemplateNotFound(
                "Unsupported template type", template_type=template_type
            )
        return self.create(info.category, template_type, options, **kwargs)

    def create(
        self,
        category: TemplateCategory,
        template_type: TemplateType,
        options: Optional[TemplateOptions] = None,
        **kwargs: Any,
    ) -> TemplateProduct:
        builder = self._registries[category].get(template_type)
        if builder is None:
            raise TemplateNotFound(
                f"Unsupported {category.value} template type",
                template_type=template_type,
            )
        return builder.build(self.config, options, **kwargs)

    def create_project_template(self, template_type: TemplateType, **kwargs: Any) -> TemplateProduct:
        return self.create(TemplateCategory.PROJECT_WIDE, template_type, **kwargs)

    def create_resource_template(self, template_type: TemplateType, **kwargs: Any) -> TemplateProduct:
        return self.create(TemplateCategory.PER_RESOURCE, template_type, **kwargs)

    def create_static_template(self, template_type: TemplateType, **kwargs: Any) -> TemplateProduct:
        return self.create(TemplateCategory.STATIC, template_type, **kwargs)

    # -- Whole categories --------------------------------------------------

    def supported_types(self, category: Optional[TemplateCategory] = None) -> list[TemplateType]:
        """Identifiers in discovery order, optionally limited to one category."""
        if category is None:
            return list(self.descriptors)
        return list(self._registries[category])

    def templates_for(self, category: TemplateCategory, **kwargs: Any) -> list[TemplateProduct]:
        return [
            self.create(category, template_type, **kwargs)
            for template_type in self._registries[category]
        ]

    def project_templates(self, **kwargs: Any) -> list[TemplateProduct]:
        return self.templates_for(TemplateCategory.PROJECT_WIDE, **kwargs)

    def resource_templates(self, resource: ResourceDescriptor, **kwargs: Any) -> list[TemplateProduct]:
        return self.templates_for(TemplateCategory.PER_RESOURCE, resource=resource, **kwargs)

    def static_templates(self, **kwargs: Any) -> list[TemplateProduct]:
        return self.templates_for(TemplateCategory.STATIC, **kwargs)

    # -- Lookup ------------------------------------------------------------

    def find_type(self, alias: str) -> TemplateType:
        """Resolve a short alias (``gomod``, ``apitypes``...) to an identifier.

        Known aliases map exactly; anything else falls back to a
        case-insensitive substring search, preferring the shortest match.
        """
        key = alias.lower()
        stem = TEMPLATE_ALIASES.get(key)
        if stem is not None and f"{stem}Type" in self.descriptors:
            return f"{stem}Type"

        candidates = sorted(
            (t for t in self.descriptors if key in t.lower()),
            key=lambda t: (len(t), t),
        )
        if candidates:
            return candidates[0]
        raise TemplateNotFound(f"No template type matches alias '{alias}'")
