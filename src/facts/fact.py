"""A named, lazily resolved piece of host information."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from .errors import ResolutionConfigError
from .resolution import Resolution

if TYPE_CHECKING:
    from .registry import FactRegistry

logger = structlog.get_logger()

# Marks a value that has not been computed yet; None is a valid settled value.
_UNKNOWN = object()


def _normalize_tag(tag: Any) -> str:
    return str(tag).lower()


class Fact:
    """A fact with competing resolutions, ordered most-confined first."""

    def __init__(self, name: str, registry: FactRegistry):
        self.name = str(name).lower()
        self.registry = registry
        self.ldapname = self.name
        self.searching = False
        self._resolutions: list[Resolution] = []
        self._tags: dict[str, None] = {}
        self._value: Any = _UNKNOWN
        self._suitable: Optional[bool] = None

    def __repr__(self) -> str:
        return f"<Fact {self.name} resolutions={len(self._resolutions)}>"

    def __len__(self) -> int:
        return len(self._resolutions)

    def __iter__(self):
        return iter(list(self._resolutions))

    @property
    def resolutions(self) -> tuple[Resolution, ...]:
        return tuple(self._resolutions)

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self._tags)

    def count(self) -> int:
        """Number of resolution mechanisms available."""
        return len(self._resolutions)

    def add(self, setup: Callable[[Resolution], Any]) -> Optional[Resolution]:
        """Build a new resolution with ``setup`` and insert it by specificity.

        Resolutions that are unsuitable at registration time are dropped.

        Returns:
            The inserted resolution, or None if it was discarded.

        Raises:
            ResolutionConfigError: If setup is not callable or sets no execution.
        """
        if not callable(setup):
            raise ResolutionConfigError(f"A setup callable is required to add a resolution to {self.name}")

        resolution = Resolution(self)
        setup(resolution)

        if resolution.execution is None:
            raise ResolutionConfigError(f"Resolution for {self.name} has no execution set")

        if not resolution.suitable():
            logger.debug("resolution_discarded", fact=self.name, confines=[str(c) for c in resolution.confines])
            return None

        for index, existing in enumerate(self._resolutions):
            if resolution.length > existing.length:
                self._resolutions.insert(index, resolution)
                break
        else:
            self._resolutions.append(resolution)

        return resolution

    def suitable(self) -> bool:
        """Whether any resolution is usable on this host.

        Once computed the answer is kept for the life of the fact; flush() does
        not reset it.
        """
        if not self._resolutions:
            return False

        if self._suitable is None:
            self._suitable = any(r.suitable() for r in self._resolutions)
        return self._suitable

    def tag(self, *names: Any) -> None:
        """Add one or more tags."""
        for name in names:
            self._tags.setdefault(_normalize_tag(name), None)

    def tagged(self, *names: Any) -> bool:
        """True if the fact carries every given tag."""
        return all(_normalize_tag(name) in self._tags for name in names)

    def flush(self) -> None:
        """Forget the cached value so the next read re-resolves."""
        self._value = _UNKNOWN

    def value(self) -> Any:
        """Resolve the fact, returning the first non-empty value or None."""
        if self._value is not _UNKNOWN:
            return self._value

        # A fact whose confines lead back to itself lands here mid-search.
        if self.searching:
            logger.debug("fact_recursion_detected", fact=self.name)
            return None

        if not self._resolutions:
            logger.debug("fact_no_resolutions", fact=self.name)
            self._value = None
            return None

        value = None
        found_suitable = False
        self.searching = True
        try:
            for resolution in self._resolutions:
                if not resolution.suitable():
                    continue
                found_suitable = True
                value = resolution.value()
                if value is not None and value != "":
                    break
                value = None
        finally:
            self.searching = False

        if not found_suitable:
            logger.debug("fact_no_suitable_resolutions", fact=self.name, count=len(self._resolutions))
        if value is None:
            logger.debug("fact_value_nil", fact=self.name)

        self._value = value
        return value

    def matches(self, *values: Any) -> bool:
        """Case-insensitive comparison of the value against any of ``values``."""
        value = self.value()
        if value is None:
            return False
        current = str(value).lower()
        return any(current == str(v).lower() for v in values)
