"""Shared CLI utilities."""

import structlog

from catalog import load_builtin, load_fact_dirs
from facts import FactRegistry

from .config_models import FactsConfig

logger = structlog.get_logger()


def build_registry(config: FactsConfig) -> FactRegistry:
    """Create a registry and load the configured fact definitions into it."""
    registry = FactRegistry(
        default_interpreter=config.execution.interpreter,
        command_timeout=config.execution.timeout,
    )

    if config.catalog.load_builtin:
        load_builtin(registry)

    loaded = load_fact_dirs(registry, config.catalog.fact_dirs)
    if loaded:
        # Later files may add more specific resolutions to facts already read
        registry.flush_all()

    logger.debug("registry_built", facts=len(registry), fact_files=loaded)
    return registry
