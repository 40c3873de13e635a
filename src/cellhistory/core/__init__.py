"""Core package initializer for cellhistory.

Settings and logging live in ``cellhistory.core.settings``; the engine itself
is split into ``actions``, ``snapshot`` and ``history`` subpackages.
"""

from __future__ import annotations

__all__ = ["__doc__"]
