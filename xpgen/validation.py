"""Input validation for the command layer.

Checks the values a user types on the command line before any template is
touched: the API domain and module path given to ``init`` and the
group/version/kind given to ``create-api``.  Every failure raises
:class:`FieldValidationError` naming the offending field.
"""

from __future__ import annotations

import re

from xpgen.scaffolder.models import ResourceDescriptor
from xpgen.utils import print_warning

_DOMAIN_RE = re.compile(r"^[a-z0-9]+([-.][a-z0-9]+)*\.[a-z]{2,}$")
_REPOSITORY_RE = re.compile(r"^[a-z0-9.-]+/[a-z0-9._-]+/[a-z0-9._-]+$")
_GROUP_RE = re.compile(r"^[a-z]([-a-z0-9]*[a-z0-9])?$")
_VERSION_RE = re.compile(r"^v\d+(alpha\d+|beta\d+)?$")
_KIND_RE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")

MAX_NAME_LENGTH = 63

RESERVED_KINDS: tuple[str, ...] = (
    "Node",
    "Pod",
    "Service",
    "Deployment",
    "ConfigMap",
    "Secret",
    "Namespace",
    "CustomResourceDefinition",
)


class FieldValidationError(ValueError):
    """A user-supplied value is not acceptable."""

    def __init__(self, field: str, value: str, message: str) -> None:
        self.field = field
        self.value = value
        self.message = message
        super().__init__(f"invalid {field} '{value}': {message}")


def validate_domain(domain: str) -> str:
    """Validate an API domain such as ``example.com``."""
    if not domain:
        raise FieldValidationError("domain", domain, "domain is required")
    if not _DOMAIN_RE.match(domain):
        raise FieldValidationError(
            "domain", domain, "must be a valid domain name (e.g., example.com)"
        )
    if domain.endswith(".local"):
        raise FieldValidationError(
            "domain", domain, ".local domains are not recommended for production use"
        )
    return domain


def validate_repository(repo: str) -> str:
    """Validate a Go module path of the form ``host/user/repository``.

    A repository name without the ``provider-`` prefix is accepted with a
    warning.
    """
    if not repo:
        raise FieldValidationError("repository", repo, "repository is required")
    if not _REPOSITORY_RE.match(repo):
        raise FieldValidationError(
            "repository",
            repo,
            "must be a valid go module name (e.g., github.com/example/provider-name)",
        )
    name = repo.rsplit("/", 1)[-1]
    if not name.startswith("provider-"):
        print_warning(
            f"Warning: Repository name '{name}' doesn't follow Crossplane convention 'provider-*'"
        )
    return repo


def validate_group(group: str) -> str:
    if not group:
        raise FieldValidationError("group", group, "group is required")
    if not _GROUP_RE.match(group):
        raise FieldValidationError(
            "group",
            group,
            "must start with a letter and be lowercase alphanumeric with hyphens"
            " (e.g., compute, storage)",
        )
    if len(group) > MAX_NAME_LENGTH:
        raise FieldValidationError("group", group, "must be 63 characters or less")
    return group


def validate_version(version: str) -> str:
    if not version:
        raise FieldValidationError("version", version, "version is required")
    if not _VERSION_RE.match(version):
        raise FieldValidationError(
            "version",
            version,
            "must follow Kubernetes version format (e.g., v1alpha1, v1beta1, v1)",
        )
    return version


def validate_kind(kind: str) -> str:
    if not kind:
        raise FieldValidationError("kind", kind, "kind is required")
    if not _KIND_RE.match(kind):
        raise FieldValidationError(
            "kind", kind, "must be PascalCase (e.g., Instance, Bucket, Database)"
        )
    if len(kind) > MAX_NAME_LENGTH:
        raise FieldValidationError("kind", kind, "must be 63 characters or less")
    for reserved in RESERVED_KINDS:
        if kind.lower() == reserved.lower():
            raise FieldValidationError(
                "kind", kind, f"'{reserved}' is a reserved Kubernetes resource name"
            )
    return kind


def validate_resource(group: str, version: str, kind: str) -> ResourceDescriptor:
    """Validate a group/version/kind triad and return its descriptor."""
    return ResourceDescriptor(
        group=validate_group(group),
        version=validate_version(version),
        kind=validate_kind(kind),
    )
