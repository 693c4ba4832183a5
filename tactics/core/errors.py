"""Exception hierarchy for the battle core.

Lookup misses are not errors: they come back as empty results, ``None`` or
``False``.  Only the cases below raise.
"""

from __future__ import annotations


class TacticsError(Exception):
    """Base class for every error raised by the battle core."""


class InvalidConfigError(TacticsError, ValueError):
    """Battlefield configuration cannot produce a grid (non-positive sizes, scale...)."""


class UnknownTemplateError(TacticsError, KeyError):
    """A unit or ability was requested from a template id that is not in the catalog."""

    def __init__(self, template_id: str) -> None:
        super().__init__(template_id)
        self.template_id = template_id

    def __str__(self) -> str:
        return f"Unknown template: {self.template_id!r}"


class SearchAbortedError(TacticsError):
    """A* expanded more nodes than the configured budget allows."""

    def __init__(self, expanded: int, budget: int) -> None:
        super().__init__(f"Search aborted after {expanded} nodes (budget {budget})")
        self.expanded = expanded
        self.budget = budget


class OccupancyError(TacticsError, RuntimeError):
    """A unit's stored position and its cell's occupant disagree."""
