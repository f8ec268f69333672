"""Version comparison and release classification.

Versions are compared leniently: a missing version counts as ``0.0.0`` and
each dot-separated component contributes its leading digits (or 0). This
never raises, so a malformed changelog heading simply produces no release.
"""

from __future__ import annotations

import re
from enum import StrEnum

DEFAULT_VERSION = "0.0.0"

_LEADING_DIGITS = re.compile(r"\d+")


class ReleaseType(StrEnum):
    """How much a version changed."""

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


def parse_components(version: str | None) -> tuple[int, ...]:
    """Split a dotted version into integers.

    >>> parse_components("1.2.3-rc1")
    (1, 2, 3)
    >>> parse_components("1.x")
    (1, 0)
    """
    text = (version or DEFAULT_VERSION).strip() or DEFAULT_VERSION
    components = []
    for part in text.split("."):
        match = _LEADING_DIGITS.match(part.strip())
        components.append(int(match.group(0)) if match else 0)
    return tuple(components)


def _padded(a: tuple[int, ...], b: tuple[int, ...]) -> tuple[tuple[int, ...], tuple[int, ...]]:
    width = max(len(a), len(b))
    return a + (0,) * (width - len(a)), b + (0,) * (width - len(b))


def compare_versions(left: str | None, right: str | None) -> int:
    """Return -1, 0 or 1 as ``left`` is older, equal to or newer than ``right``."""
    a, b = _padded(parse_components(left), parse_components(right))
    return (a > b) - (a < b)


def classify(next_version: str | None, current_version: str | None) -> ReleaseType:
    """Classify the change from ``current_version`` to ``next_version``.

    Returns ``NONE`` unless ``next_version`` is strictly newer. Otherwise the
    coarsest differing component decides: first is MAJOR, second is MINOR,
    anything after is PATCH.
    """
    a, b = _padded(parse_components(next_version), parse_components(current_version))
    if a <= b:
        return ReleaseType.NONE

    index = next(i for i, (x, y) in enumerate(zip(a, b, strict=True)) if x != y)
    if index == 0:
        return ReleaseType.MAJOR
    if index == 1:
        return ReleaseType.MINOR
    return ReleaseType.PATCH
