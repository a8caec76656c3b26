"""Template classification.

Maps a template's location inside the store to a :class:`TemplateCategory`
and a stable type identifier.  The identifier is built from the output-path
skeleton by splitting on path separators and on ``-``, ``_`` and ``.``, then
concatenating the capitalised fragments::

    apis/GROUP/VERSION/KIND_types.go -> ApisGroupVersionKindTypesGoType
"""

from __future__ import annotations

import posixpath
import re

from .models import TemplateCategory, TemplateDescriptor, TemplateType

TEMPLATE_SUFFIX = ".j2"

# Leading segment that stands for "the root of the generated project".
PROJECT_ROOT_PREFIX = "project/"

PER_RESOURCE_PATTERNS: tuple[str, ...] = (
    "apis/GROUP/VERSION/",
    "internal/controller/KIND/",
    "examples/GROUP/",
)

STATIC_NAMES: frozenset[str] = frozenset({"LICENSE"})

_WORD_BOUNDARY = re.compile(r"[-_.]+")


def classify(skeleton: str) -> TemplateCategory:
    """Return the category owning the output-path *skeleton*."""
    for pattern in PER_RESOURCE_PATTERNS:
        if pattern in skeleton:
            return TemplateCategory.PER_RESOURCE
    if posixpath.basename(skeleton) in STATIC_NAMES:
        return TemplateCategory.STATIC
    return TemplateCategory.PROJECT_WIDE


def derive_identifier(skeleton: str) -> TemplateType:
    """Synthesise the type identifier for an output-path *skeleton*."""
    name = ""
    for part in skeleton.split("/"):
        for word in _WORD_BOUNDARY.split(part):
            if word:
                name += word[:1].upper() + word[1:].lower()
    return name + "Type"


def analyze_template_path(source_path: str) -> TemplateDescriptor:
    """Build the descriptor for a template at *source_path* (store-relative).

    Windows separators are normalised so a store walked on any platform
    yields the same identifiers.
    """
    clean = source_path.replace("\\", "/").lstrip("/")
    skeleton = clean[: -len(TEMPLATE_SUFFIX)] if clean.endswith(TEMPLATE_SUFFIX) else clean
    return TemplateDescriptor(
        identifier=derive_identifier(skeleton),
        source_path=clean,
        category=classify(skeleton),
        output_pattern=skeleton,
    )
