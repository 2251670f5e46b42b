"""Confinement predicates restricting a resolution to matching hosts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from .errors import ResolutionConfigError

if TYPE_CHECKING:
    from .registry import FactRegistry

logger = structlog.get_logger()


class Confine:
    """Compares another fact's current value against a set of accepted values.

    Holds only the target fact's name; the fact itself is looked up through the
    registry on every evaluation.
    """

    def __init__(self, fact: str, *values: Any):
        if not values:
            raise ResolutionConfigError(f"Confine on '{fact}' needs at least one value")
        self.fact = str(fact)
        self.values = [v if isinstance(v, str) else str(v) for v in values]

    def __repr__(self) -> str:
        return f"Confine({self.fact!r}, {', '.join(repr(v) for v in self.values)})"

    def __str__(self) -> str:
        return "'%s' '%s'" % (self.fact, ",".join(self.values))

    def evaluate(self, registry: FactRegistry) -> bool:
        """True if the target fact's value matches any accepted value (case-insensitive)."""
        fact = registry.lookup(self.fact)
        if fact is None:
            logger.debug("confine_fact_missing", fact=self.fact)
            return False

        value = fact.value()
        if value is None:
            return False

        current = str(value).lower()
        return any(current == v.lower() for v in self.values)
