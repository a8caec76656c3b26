"""xp-provider-gen configuration.

Typed configuration for generated provider projects.  ``ProjectConfig`` is
the read-only configuration the template engine consumes (module path,
domain, project name); ``GeneratorDefaults`` carries the flag defaults the
command layer falls back on.  All models use Pydantic v2 so they validate at
construction time and round-trip through the ``PROJECT`` file.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from xpgen.scaffolder.models import ResourceDescriptor
from xpgen.utils import sanitize_name

DEFAULT_PROVIDER_NAME = "provider-example"

_BOILERPLATE = """/*
Copyright {year} {owner}.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
*/"""


class ToolchainConfig(BaseModel):
    """Versions and sources pinned into the generated ``go.mod`` and build files."""

    go_version: str = Field(default="1.24")
    crossplane_runtime: str = Field(default="v2.0.0")
    kubernetes_version: str = Field(default="0.31.0")
    build_submodule_url: str = Field(default="https://github.com/crossplane/build")


class GeneratorDefaults(BaseModel):
    """Defaults applied by the command layer when flags are omitted."""

    repo_prefix: str = Field(default="github.com/crossplane-contrib")

    def default_repo(self, directory: str | Path | None = None) -> str:
        """Derive a module path from a directory name.

        ``my_cloud`` becomes ``<prefix>/provider-my-cloud`` and
        ``crossplane-foo`` becomes ``<prefix>/provider-foo``.
        """
        target = Path(directory) if directory is not None else Path.cwd()
        dir_name = sanitize_name(target.resolve().name.replace("_", "-"))
        if not dir_name:
            return f"{self.repo_prefix}/{DEFAULT_PROVIDER_NAME}"
        if not dir_name.startswith("provider-"):
            if dir_name.startswith("crossplane-"):
                dir_name = dir_name.replace("crossplane-", "provider-", 1)
            else:
                dir_name = f"provider-{dir_name}"
        return f"{self.repo_prefix}/{dir_name}"


class ProjectConfig(BaseModel):
    """Configuration of one generated provider project.

    Holds the identifiers every template is parameterised with and the list
    of resources scaffolded so far.  Instances are created by the command
    layer (or loaded from ``PROJECT``) and are never mutated by the engine.
    """

    module_path: str = Field(default="", description="Go module path of the generated project")
    domain: str = Field(default="", description="DNS-like domain for API groups")
    project_name: str = Field(default="", description="Explicit project name (optional)")
    owner: str = Field(default="", description="Copyright owner for the boilerplate header")
    header: str = Field(
        default="", description="Verbatim license header; replaces the generated one when set"
    )
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    resources: list[ResourceDescriptor] = Field(default_factory=list)

    # ------------------------------------------------------------------
    # Derived names (read-only properties)
    # ------------------------------------------------------------------

    @property
    def provider_name(self) -> str:
        """Final path segment of the module path."""
        if not self.module_path:
            return DEFAULT_PROVIDER_NAME
        last = self.module_path.rstrip("/").split("/")[-1]
        return last or DEFAULT_PROVIDER_NAME

    @property
    def derived_project_name(self) -> str:
        """Explicit project name, else the provider name."""
        return self.project_name or self.provider_name

    @property
    def boilerplate(self) -> str:
        """License header prepended to every generated Go file.

        An explicit ``header`` (normally the project's own
        ``hack/boilerplate.go.txt``) wins, so the copyright year stays fixed
        across regenerations.
        """
        if self.header:
            return self.header
        owner = self.owner or "The Crossplane Authors"
        return _BOILERPLATE.format(year=datetime.now(timezone.utc).year, owner=owner)

    # ------------------------------------------------------------------
    # Resource tracking
    # ------------------------------------------------------------------

    def has_resource(self, resource: ResourceDescriptor) -> bool:
        return any(r.key() == resource.key() for r in self.resources)

    def add_resource(self, resource: ResourceDescriptor) -> bool:
        """Track *resource*; returns ``False`` if it was already tracked."""
        if self.has_resource(resource):
            return False
        self.resources.append(resource)
        return True

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "ProjectConfig":
        """Build a ``ProjectConfig`` from environment variables.

        Recognised variables (all optional):
            XPGEN_REPO, XPGEN_DOMAIN, XPGEN_PROJECT_NAME, XPGEN_OWNER,
            XPGEN_GO_VERSION.

        Keyword *overrides* win over the environment.
        """
        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("XPGEN_GO_VERSION"):
            toolchain_kwargs["go_version"] = os.environ["XPGEN_GO_VERSION"]

        values: dict[str, Any] = {
            "module_path": os.environ.get("XPGEN_REPO", ""),
            "domain": os.environ.get("XPGEN_DOMAIN", ""),
            "project_name": os.environ.get("XPGEN_PROJECT_NAME", ""),
            "owner": os.environ.get("XPGEN_OWNER", ""),
            "toolchain": ToolchainConfig(**toolchain_kwargs),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
