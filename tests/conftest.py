"""Shared pytest fixtures for the xp-provider-gen test suite.

Provides reusable fixtures for:
- A representative project configuration and resource descriptors
- The bundled template store and a factory built on it
- Throwaway template stores assembled from inline files
- Temporary project roots
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from xpgen.config import ProjectConfig
from xpgen.scaffolder.factory import TemplateFactory
from xpgen.scaffolder.filesystem import ProjectFilesystem
from xpgen.scaffolder.models import ResourceDescriptor
from xpgen.scaffolder.templates import TemplateStore

REPO = "github.com/acme/provider-acme"
DOMAIN = "acme.io"


# ---------------------------------------------------------------------------
# Configuration & resources
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> ProjectConfig:
    """A minimal project configuration."""
    return ProjectConfig(module_path=REPO, domain=DOMAIN)


@pytest.fixture
def instance() -> ResourceDescriptor:
    return ResourceDescriptor(group="compute", version="v1alpha1", kind="Instance")


@pytest.fixture
def bucket() -> ResourceDescriptor:
    return ResourceDescriptor(group="storage", version="v1alpha1", kind="Bucket")


# ---------------------------------------------------------------------------
# Template stores
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def store() -> TemplateStore:
    """The bundled template store."""
    return TemplateStore()


@pytest.fixture
def factory(config: ProjectConfig, store: TemplateStore) -> TemplateFactory:
    return TemplateFactory(config, store)


@pytest.fixture
def make_store(tmp_path: Path) -> Callable[[dict[str, str]], TemplateStore]:
    """Build a store from ``{relative path: body}``; ``.j2`` is not added."""

    def _make(files: dict[str, str]) -> TemplateStore:
        root = tmp_path / "store"
        root.mkdir(exist_ok=True)
        for rel, body in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(body, encoding="utf-8")
        return TemplateStore(root)

    return _make


# ---------------------------------------------------------------------------
# Project roots
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty directory standing in for a generated provider project."""
    root = tmp_path / "provider-acme"
    root.mkdir()
    yield root


@pytest.fixture
def filesystem(project_root: Path) -> ProjectFilesystem:
    return ProjectFilesystem(project_root)
