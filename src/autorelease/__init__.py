"""autorelease - changelog-driven release automation for GitHub projects."""

from __future__ import annotations

__version__ = "0.1.0"
