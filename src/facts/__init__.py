"""Lazy, confinement-driven registry of facts about the host."""

from .confine import Confine
from .errors import DuplicateFactError, FactError, ResolutionConfigError
from .execution import DEFAULT_INTERPRETER, run_command
from .fact import Fact
from .registry import FactRegistry
from .resolution import Computation, ExternalCommand, Resolution

__version__ = "0.1.0"

__all__ = [
    "Computation",
    "Confine",
    "DEFAULT_INTERPRETER",
    "DuplicateFactError",
    "ExternalCommand",
    "Fact",
    "FactError",
    "FactRegistry",
    "Resolution",
    "ResolutionConfigError",
    "run_command",
]
