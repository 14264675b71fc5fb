"""Canonical comparison form for documentation category and file names."""

from __future__ import annotations

import re


_ORDERING_PREFIX = re.compile(r"^\s*[0-9]+[_-]")
_SEPARATOR_RUN = re.compile(r"[_-]+")
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Normalize a raw name so that equivalent labels compare equal.

    Steps (order matters):
    - Lowercase
    - Trim surrounding whitespace
    - Drop a leading ordering prefix such as "04_" or "10-"
    - Turn runs of underscores/hyphens into a single space
    - Collapse whitespace runs, then trim again

    Example:
      "  11-terraGRUNT-cache  " -> "terragrunt cache"
    """
    value = text.lower().strip()
    value = _ORDERING_PREFIX.sub("", value, count=1)
    value = _SEPARATOR_RUN.sub(" ", value)
    value = _WHITESPACE_RUN.sub(" ", value)
    return value.strip()
