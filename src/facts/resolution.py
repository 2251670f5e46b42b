"""A single candidate mechanism for computing a fact's value."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

import structlog

from .confine import Confine
from .errors import ResolutionConfigError
from .execution import run_command

if TYPE_CHECKING:
    from .fact import Fact

logger = structlog.get_logger()


@dataclass(frozen=True)
class ExternalCommand:
    """Run a shell command and use its output."""

    command: str
    interpreter: str


@dataclass(frozen=True)
class Computation:
    """Call a zero-argument function and use its result."""

    func: Callable[[], Any]


Execution = Union[ExternalCommand, Computation]


def _as_values(values: Any) -> tuple:
    if isinstance(values, (list, tuple, set, frozenset)):
        return tuple(values)
    return (values,)


class Resolution:
    """One way of resolving a fact, gated by zero or more confines.

    Confines are ANDed: every one must hold for the resolution to be suitable.
    """

    def __init__(self, fact: Fact):
        self.fact = fact
        self.confines: list[Confine] = []
        self.execution: Optional[Execution] = None
        self._suitable: Optional[bool] = None

    def __repr__(self) -> str:
        return f"<Resolution {self.fact.name} confines={len(self.confines)} execution={self.execution!r}>"

    def __len__(self) -> int:
        return len(self.confines)

    @property
    def length(self) -> int:
        """Number of confines; the resolution's specificity."""
        return len(self.confines)

    def confine(self, *args: Any, **kwargs: Any) -> None:
        """Add confines.

        Accepts a fact name followed by accepted values, a mapping of fact name
        to value(s), or keyword arguments of the same shape::

            res.confine("kernel", "linux", "sunos")
            res.confine({"kernel": "darwin", "kernelrelease": "R7"})
            res.confine(operatingsystem=["FreeBSD", "Darwin"])
        """
        if args and isinstance(args[0], Mapping):
            if len(args) > 1:
                raise ResolutionConfigError("confine() takes a single mapping")
            for fact, values in args[0].items():
                self.confines.append(Confine(fact, *_as_values(values)))
        elif args:
            fact, *values = args
            self.confines.append(Confine(fact, *values))

        for fact, values in kwargs.items():
            self.confines.append(Confine(fact, *_as_values(values)))

    def set_execution(
        self,
        code: Union[str, Callable[[], Any]],
        interpreter: Optional[str] = None,
    ) -> None:
        """Set how the value is produced: a command string or a callable."""
        if self.execution is not None:
            raise ResolutionConfigError(f"Execution for {self.fact.name} is already set")

        if isinstance(code, str):
            self.execution = ExternalCommand(
                command=code,
                interpreter=interpreter or self.fact.registry.default_interpreter,
            )
        elif callable(code):
            if interpreter is not None:
                raise ResolutionConfigError("An interpreter only applies to command strings")
            self.execution = Computation(func=code)
        else:
            raise ResolutionConfigError(
                f"Execution for {self.fact.name} must be a command string or a callable, "
                f"got {type(code).__name__}"
            )

    def set_ldapname(self, name: str) -> None:
        """Set the name the owning fact is known by in LDAP."""
        self.fact.ldapname = name

    def tag(self, *names: str) -> None:
        """Tag the owning fact."""
        self.fact.tag(*names)

    def suitable(self) -> bool:
        """Whether every confine holds. Computed once, then cached."""
        if self._suitable is None:
            registry = self.fact.registry
            self._suitable = all(c.evaluate(registry) for c in self.confines)
        return self._suitable

    def value(self) -> Any:
        """Run the execution and return its result, or None."""
        execution = self.execution
        if isinstance(execution, Computation):
            result = execution.func()
        elif isinstance(execution, ExternalCommand):
            result = run_command(
                execution.command,
                interpreter=execution.interpreter,
                timeout=self.fact.registry.command_timeout,
            )
        else:
            raise ResolutionConfigError(f"No execution set for {self.fact.name}")

        if result == "":
            return None
        return result
