"""Output-path templating.

Template locations double as output locations: ``apis/GROUP/VERSION/...``
becomes ``apis/compute/v1alpha1/...`` once the placeholder tokens are bound.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from .classifier import PROJECT_ROOT_PREFIX

GROUP_TOKEN = "GROUP"
VERSION_TOKEN = "VERSION"
KIND_TOKEN = "KIND"
IMAGE_NAME_TOKEN = "IMAGE_NAME"

KNOWN_TOKENS: tuple[str, ...] = (GROUP_TOKEN, VERSION_TOKEN, KIND_TOKEN, IMAGE_NAME_TOKEN)


def strip_project_root(skeleton: str) -> str:
    """Drop the leading ``project/`` container segment, if any."""
    if skeleton.startswith(PROJECT_ROOT_PREFIX):
        return skeleton[len(PROJECT_ROOT_PREFIX):]
    return skeleton


def render_path(skeleton: str, substitutions: Mapping[str, str] | None = None) -> str:
    """Substitute placeholder tokens in an output-path *skeleton*.

    Every occurrence of each bound token is replaced in a single pass, so a
    substituted value is never itself re-scanned for tokens.  Tokens without
    a binding are left as they are.
    """
    path = strip_project_root(skeleton)
    if not substitutions:
        return path

    # Longest first so IMAGE_NAME is never split by a shorter token.
    tokens = sorted((token for token in substitutions if token), key=len, reverse=True)
    if not tokens:
        return path
    pattern = re.compile("|".join(re.escape(token) for token in tokens))
    return pattern.sub(lambda match: substitutions[match.group(0)], path)
