"""Pydantic v2 models for the template-production engine.

Defines the closed set of template categories, the existence policies a
product can carry, and the immutable descriptors that flow between the
store, the builders and the aggregator updaters.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from xpgen.utils import go_identifier

# Identifier synthesised from a template's path, e.g. ``ApisGroupVersionKindTypesGoType``.
TemplateType = str


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TemplateCategory(str, Enum):
    """Which builder owns a template."""
    PROJECT_WIDE = "project"
    PER_RESOURCE = "resource"
    STATIC = "static"


class ExistsPolicy(str, Enum):
    """What writing a product does when its target already exists."""
    ERROR = "error"
    OVERWRITE = "overwrite"


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

class ResourceDescriptor(BaseModel):
    """The group/version/kind triad identifying one managed resource.

    Validation of the individual fields lives in :mod:`xpgen.validation`;
    this model only carries the values and the derived names the templates
    and aggregators need.
    """
    model_config = ConfigDict(frozen=True)

    group: str = Field(default="", description="API group, e.g. 'compute'")
    version: str = Field(..., description="API version, e.g. 'v1alpha1'")
    kind: str = Field(..., description="PascalCase kind, e.g. 'Instance'")

    @property
    def is_base(self) -> bool:
        """True for the provider's own group-less API (``apis/v1alpha1``)."""
        return not self.group

    @property
    def kind_lower(self) -> str:
        return self.kind.lower()

    @property
    def group_lower(self) -> str:
        return self.group.lower()

    @property
    def alias(self) -> str:
        """Go import alias for this group/version, e.g. ``computev1alpha1``."""
        return f"{go_identifier(self.group)}{self.version}"

    def qualified_group(self, domain: str) -> str:
        """Return the fully qualified API group (``compute.example.io``)."""
        if not domain:
            return self.group_lower
        return f"{self.group_lower}.{domain}"

    def key(self) -> tuple[str, str, str]:
        return (self.group, self.version, self.kind)

    def __str__(self) -> str:
        return f"{self.group}/{self.version} {self.kind}"


class TemplateDescriptor(BaseModel):
    """Metadata for one stored template, without its rendered content."""
    model_config = ConfigDict(frozen=True)

    identifier: TemplateType = Field(..., description="Synthesised type identifier")
    source_path: str = Field(
        ..., description="Path relative to the store root, including the template suffix"
    )
    category: TemplateCategory = Field(..., description="Owning builder category")
    output_pattern: str = Field(
        ..., description="Output-path skeleton with placeholder tokens, suffix stripped"
    )


class TemplateOptions(BaseModel):
    """Options a caller passes when asking the factory for a product."""
    force: bool = Field(default=False, description="Overwrite the target if it exists")
    resource: Optional[ResourceDescriptor] = Field(
        default=None, description="Resource bound to per-resource products"
    )
    custom_data: dict[str, Any] = Field(
        default_factory=dict, description="Extra values merged into the render context"
    )
