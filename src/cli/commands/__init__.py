"""CLI command modules."""

from .facts import explain, list_facts, show

__all__ = [
    "show",
    "list_facts",
    "explain",
]
