"""External command execution for command-style resolutions."""

import os
import shutil
import subprocess
from typing import Optional

import structlog

logger = structlog.get_logger()

DEFAULT_INTERPRETER = "/bin/sh"


def _locate_binary(command: str) -> Optional[str]:
    """Resolve the first word of a command to an existing executable path."""
    parts = command.split()
    if not parts:
        return None
    binary = parts[0]

    if os.path.isabs(binary):
        path = binary
    else:
        path = shutil.which(binary)
        if not path:
            return None

    if not os.path.exists(path):
        return None
    return path


def run_command(
    command: str,
    interpreter: str = DEFAULT_INTERPRETER,
    timeout: Optional[float] = None,
) -> Optional[str]:
    """Run a command through an interpreter and return its trimmed stdout.

    Args:
        command: Full command line, passed to the interpreter with ``-c``
        interpreter: Shell used to run the command
        timeout: Seconds before the command is abandoned. None blocks until it exits.

    Returns:
        Output with trailing whitespace removed, or None if the binary is
        missing, the command fails, or it prints nothing.
    """
    if _locate_binary(command) is None:
        logger.debug("command_binary_missing", command=command)
        return None

    try:
        result = subprocess.run(
            [interpreter, "-c", command],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning("command_error", command=command, error=str(e))
        return None

    if result.returncode != 0:
        logger.debug(
            "command_failed",
            command=command,
            returncode=result.returncode,
            stderr=result.stderr.strip()[:200],
        )
        return None

    out = result.stdout.rstrip()
    return out or None
