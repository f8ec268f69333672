"""Changelog parsing.

The changelog is plain Markdown. Version sections start with a level-2
heading whose first token is a dotted numeric version::

    ## 1.4.0

    Adds X

    ## 1.3.0 - 2024-01-01

    Adds Y

The first such heading is the pending release. Its notes are the lines up to
the next level-2 heading, so ``###`` subsections stay part of the notes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_VERSION_TOKEN = re.compile(r"\d[\d.]*")


@dataclass(frozen=True)
class ChangelogEntry:
    """The pending release described by a changelog."""

    version: str | None = None
    notes: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.version is not None


def _is_level_two_heading(line: str) -> bool:
    return line.startswith("##") and not line.startswith("###")


def _heading_version(line: str) -> str | None:
    """Return the version token of a ``## <version>`` line, if any."""
    if not _is_level_two_heading(line):
        return None
    match = _VERSION_TOKEN.match(line[2:].lstrip(" "))
    return match.group(0).rstrip(".") if match else None


def parse_changelog(document: str | None) -> ChangelogEntry:
    """Extract the first version and its notes from a changelog.

    Args:
        document: Changelog text

    Returns:
        The entry for the first version heading. Both fields are ``None``
        when the document is empty or has no version heading.
    """
    if not document:
        return ChangelogEntry()

    lines = document.splitlines()
    for index, line in enumerate(lines):
        version = _heading_version(line)
        if version is None:
            continue

        body: list[str] = []
        for following in lines[index + 1 :]:
            if _is_level_two_heading(following):
                break
            body.append(following)
        return ChangelogEntry(version=version, notes="\n".join(body).strip())

    return ChangelogEntry()


def read_changelog(path: Path) -> ChangelogEntry:
    """Read and parse a changelog file.

    A missing or unreadable file means there is no pending release.
    """
    try:
        document = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read changelog %s: %s", path, e)
        return ChangelogEntry()
    return parse_changelog(document)
