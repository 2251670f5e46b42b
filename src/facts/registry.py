"""Registry of named facts: registration, lookup, export, invalidation."""

from typing import Any, Callable, Iterator, Optional

import structlog

from .errors import DuplicateFactError
from .execution import DEFAULT_INTERPRETER
from .fact import Fact
from .resolution import Resolution

logger = structlog.get_logger()


class FactRegistry:
    """Maps lower-cased fact names to facts, in registration order.

    Collaborators receive the registry explicitly and call ``register`` to add
    resolutions; front-ends query it through ``value``, ``export`` and
    ``iterate``.
    """

    def __init__(
        self,
        default_interpreter: str = DEFAULT_INTERPRETER,
        command_timeout: Optional[float] = None,
    ):
        self.default_interpreter = default_interpreter
        self.command_timeout = command_timeout
        self._facts: dict[str, Fact] = {}

    def __repr__(self) -> str:
        return f"<FactRegistry facts={len(self._facts)}>"

    def __len__(self) -> int:
        return len(self._facts)

    def __contains__(self, name: object) -> bool:
        return str(name).lower() in self._facts

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return self.iterate()

    def add_fact(self, fact: Fact) -> Fact:
        """Register a directly constructed fact.

        Raises:
            DuplicateFactError: If a fact with that name already exists.
        """
        if fact.name in self._facts:
            raise DuplicateFactError(f"A fact named {fact.name} already exists")
        self._facts[fact.name] = fact
        return fact

    def register(self, name: str, setup: Optional[Callable[[Resolution], Any]] = None) -> Fact:
        """Add a resolution for a fact, creating the fact on first use.

        ``setup`` receives the new Resolution and configures it through
        ``confine``, ``set_execution``, ``set_ldapname`` and ``tag``. Without a
        setup the (possibly new) fact is returned unchanged.
        """
        key = str(name).lower()
        fact = self._facts.get(key)
        if fact is None:
            fact = self.add_fact(Fact(key, self))

        if setup is not None:
            fact.add(setup)
        return fact

    def resolution(
        self,
        name: str,
        *,
        confine: Optional[dict] = None,
        tags: tuple = (),
        ldapname: Optional[str] = None,
    ) -> Callable:
        """Decorator registering a zero-argument function as a resolution.

        Example::

            @registry.resolution("operatingsystem", confine={"kernel": "sunos"})
            def solaris():
                return "Solaris"
        """

        def decorator(func: Callable[[], Any]) -> Callable[[], Any]:
            def setup(res: Resolution) -> None:
                if confine:
                    res.confine(confine)
                if ldapname:
                    res.set_ldapname(ldapname)
                if tags:
                    res.tag(*tags)
                res.set_execution(func)

            self.register(name, setup)
            return func

        return decorator

    def lookup(self, name: str) -> Optional[Fact]:
        """Return the fact registered under ``name`` (case-insensitive), or None."""
        return self._facts.get(str(name).lower())

    get = lookup

    def value(self, name: str) -> Any:
        """Resolved value of a fact, or None if unknown or unresolvable."""
        fact = self.lookup(name)
        if fact is None:
            return None
        return fact.value()

    def matches(self, name: str, *values: Any) -> bool:
        """Whether fact ``name`` currently equals any of ``values`` (case-insensitive)."""
        fact = self.lookup(name)
        if fact is None:
            logger.debug("fact_missing", fact=name)
            return False
        return fact.matches(*values)

    def iterate(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(name, value)`` for every suitable fact with a value."""
        for name, fact in list(self._facts.items()):
            if not fact.suitable():
                continue
            value = fact.value()
            if value is not None:
                yield name, value

    def export(self, *tags: str) -> dict[str, Any]:
        """Snapshot of suitable facts carrying every tag in ``tags``."""
        result = {}
        for name, fact in list(self._facts.items()):
            if not fact.suitable():
                continue
            if tags and not fact.tagged(*tags):
                continue
            value = fact.value()
            if value is not None:
                result[name] = value
        return result

    def names(self) -> list[str]:
        """All registered fact names in registration order."""
        return list(self._facts)

    def flush_all(self) -> None:
        """Forget every cached value."""
        for fact in self._facts.values():
            fact.flush()

    def clear(self) -> None:
        """Flush and then drop every fact."""
        self.flush_all()
        self._facts.clear()
