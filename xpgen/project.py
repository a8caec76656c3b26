"""The ``PROJECT`` file: persisted configuration of a generated provider.

``xpgen init`` writes it, ``xpgen create-api`` reads it back to recover the
module path and domain and appends every scaffolded resource to it.  The
document is plain YAML::

    domain: acme.io
    layout:
    - crossplane.io/v2
    projectName: provider-acme
    repo: github.com/acme/provider-acme
    resources:
    - domain: acme.io
      group: compute
      kind: Instance
      path: github.com/acme/provider-acme/apis/compute/v1alpha1
      version: v1alpha1
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from xpgen.config import ProjectConfig
from xpgen.scaffolder.models import ResourceDescriptor

PROJECT_FILE_NAME = "PROJECT"
PROJECT_LAYOUT = "crossplane.io/v2"


def resource_entry(config: ProjectConfig, resource: ResourceDescriptor) -> dict[str, Any]:
    """Serialise *resource* the way it appears under ``resources``."""
    path = f"{config.module_path}/apis"
    if resource.group:
        path += f"/{resource.group_lower}"
    path += f"/{resource.version}"
    return {
        "domain": config.domain,
        "group": resource.group,
        "kind": resource.kind,
        "path": path,
        "version": resource.version,
    }


class ProjectFile:
    """Reads and writes the ``PROJECT`` file at a project root."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.path = self.root / PROJECT_FILE_NAME

    def exists(self) -> bool:
        return self.path.is_file()

    # -- Serialisation -----------------------------------------------------

    @staticmethod
    def to_document(config: ProjectConfig) -> dict[str, Any]:
        document: dict[str, Any] = {
            "domain": config.domain,
            "layout": [PROJECT_LAYOUT],
            "projectName": config.derived_project_name,
            "repo": config.module_path,
        }
        if config.owner:
            document["owner"] = config.owner
        if config.resources:
            document["resources"] = [resource_entry(config, r) for r in config.resources]
        return document

    @staticmethod
    def from_document(document: dict[str, Any]) -> ProjectConfig:
        resources = [
            ResourceDescriptor(
                group=entry.get("group", "") or "",
                version=entry["version"],
                kind=entry["kind"],
            )
            for entry in document.get("resources") or []
        ]
        return ProjectConfig(
            module_path=document.get("repo", "") or "",
            domain=document.get("domain", "") or "",
            project_name=document.get("projectName", "") or "",
            owner=document.get("owner", "") or "",
            resources=resources,
        )

    # -- I/O ---------------------------------------------------------------

    def save(self, config: ProjectConfig) -> Path:
        """Write *config* to the ``PROJECT`` file, replacing any previous one."""
        self.root.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            yaml.safe_dump(self.to_document(config), default_flow_style=False, sort_keys=True),
            encoding="utf-8",
        )
        return self.path

    def load(self) -> ProjectConfig:
        """Load the configuration stored at the project root.

        Raises:
            FileNotFoundError: No ``PROJECT`` file exists (``init`` was not run).
            ValueError: The file is not valid YAML or not a YAML mapping.
        """
        if not self.path.is_file():
            raise FileNotFoundError(
                f"No {PROJECT_FILE_NAME} file in {self.root}; run 'xpgen init' first"
            )
        try:
            document = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ValueError(f"{self.path} is not valid YAML: {exc}") from exc
        if not isinstance(document, dict):
            raise ValueError(f"{self.path} is not a valid {PROJECT_FILE_NAME} file")
        return self.from_document(document)

    def add_resource(self, resource: ResourceDescriptor) -> bool:
        """Record *resource*; returns ``False`` if it was already recorded."""
        config = self.load()
        added = config.add_resource(resource)
        if added:
            self.save(config)
        return added
