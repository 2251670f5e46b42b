"""Exceptions raised for fact registration misuse."""


class FactError(Exception):
    """Base exception for fact registry errors."""
    pass


class DuplicateFactError(FactError):
    """Raised when a fact with the same name is already registered."""
    pass


class ResolutionConfigError(FactError, ValueError):
    """Raised when a resolution is set up incorrectly."""
    pass
