"""Built-in fact definitions and loading of external fact files."""

from facts import FactRegistry

from . import keys, network, process, system
from .loader import load_fact_dirs, load_fact_file

BUILTIN_MODULES = [system, network, keys, process]


def load_builtin(registry: FactRegistry) -> None:
    """Register every built-in fact on ``registry``."""
    for module in BUILTIN_MODULES:
        module.register(registry)


__all__ = [
    "BUILTIN_MODULES",
    "load_builtin",
    "load_fact_dirs",
    "load_fact_file",
]
