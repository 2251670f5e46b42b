"""Public key facts: ssh host keys and the cfengine key."""

from pathlib import Path
from typing import Optional

import structlog

from facts import FactRegistry

logger = structlog.get_logger()

SSH_DIRS = [Path("/etc/ssh"), Path("/usr/local/etc/ssh"), Path("/etc"), Path("/usr/local/etc")]

SSH_KEY_FILES = {
    "sshdsakey": "ssh_host_dsa_key.pub",
    "sshrsakey": "ssh_host_rsa_key.pub",
}

CFKEY_FILES = [
    Path("/usr/local/etc/cfkey.pub"),
    Path("/etc/cfkey.pub"),
    Path("/var/cfng/keys/localhost.pub"),
    Path("/var/cfengine/ppkeys/localhost.pub"),
]


def read_key_file(path: Path) -> Optional[str]:
    """Contents of a key file without the trailing newline, or None."""
    if not path.is_file():
        return None
    try:
        return path.read_text(errors="replace").rstrip("\n")
    except OSError as e:
        logger.debug("key_file_unreadable", path=str(path), error=str(e))
        return None


def read_cfkey(paths: list[Path]) -> Optional[str]:
    """First cfengine public key found, armor lines removed and joined."""
    for path in paths:
        text = read_key_file(path)
        if text is None:
            continue
        return "".join(line for line in text.splitlines() if "PUBLIC KEY" not in line)
    return None


def register(registry: FactRegistry) -> None:
    # One resolution per directory; registration order decides precedence.
    for directory in SSH_DIRS:
        for name, filename in SSH_KEY_FILES.items():
            path = directory / filename
            registry.register(name, lambda r, path=path: r.set_execution(lambda: read_key_file(path)))

    registry.register("cfkey", lambda r: r.set_execution(lambda: read_cfkey(CFKEY_FILES)))
