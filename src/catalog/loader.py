"""Load additional fact definitions from directories of Python files."""

import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Iterable, Optional

import structlog

from facts import FactRegistry

logger = structlog.get_logger()

MODULE_PREFIX = "_fact_file_"


def _import_file(path: Path) -> Optional[ModuleType]:
    """Import a fact file as a fresh module, or None if it fails to load.

    Modules are not cached in sys.modules so repeated loads re-run the file.
    """
    spec = importlib.util.spec_from_file_location(MODULE_PREFIX + path.stem, path)
    if spec is None or spec.loader is None:
        logger.warning("fact_file_load_failed", path=str(path), error="no loader")
        return None

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        logger.warning("fact_file_load_failed", path=str(path), error=str(e))
        return None
    return module


def load_fact_file(registry: FactRegistry, path: Path) -> bool:
    """Load one fact file and call its ``register(registry)``.

    Returns:
        True if the file registered facts, False if it was skipped.
    """
    module = _import_file(path)
    if module is None:
        return False

    register = getattr(module, "register", None)
    if not callable(register):
        logger.warning("fact_file_missing_register", path=str(path))
        return False

    register(registry)
    logger.debug("fact_file_loaded", path=str(path))
    return True


def load_fact_dirs(registry: FactRegistry, dirs: Iterable[Path]) -> int:
    """Load every ``*.py`` file in each existing directory, in name order.

    Returns:
        Number of files loaded
    """
    loaded = 0
    for directory in dirs:
        directory = Path(directory).expanduser()
        if not directory.is_dir():
            logger.debug("fact_dir_missing", path=str(directory))
            continue
        for path in sorted(directory.glob("*.py")):
            if load_fact_file(registry, path):
                loaded += 1
    return loaded
