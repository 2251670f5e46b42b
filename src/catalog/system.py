"""Version, kernel, operating system and hardware facts."""

import platform
import re
import sysconfig
from pathlib import Path
from typing import Optional

import structlog

from facts import FactRegistry, __version__

logger = structlog.get_logger()

ETC_DIR = Path("/etc")


def detect_linux_distribution(etc: Path = ETC_DIR) -> Optional[str]:
    """Name the Linux distribution from the release files under ``etc``."""
    if (etc / "debian_version").exists():
        return "Debian"
    if (etc / "gentoo-release").exists():
        return "Gentoo"
    if (etc / "fedora-release").exists():
        return "Fedora"
    redhat = etc / "redhat-release"
    if redhat.exists():
        try:
            release = redhat.read_text(errors="replace")
        except OSError as e:
            logger.debug("release_file_unreadable", path=str(redhat), error=str(e))
            return None
        if re.search(r"centos", release, re.IGNORECASE):
            return "CentOS"
        return "RedHat"
    if (etc / "SuSE-release").exists():
        return "SuSE"
    return None


def debian_architecture(model: Optional[str]) -> Optional[str]:
    """Map a hardware model to Debian's architecture name."""
    if model is None:
        return None
    if model == "x86_64":
        return "amd64"
    if re.search(r"i[3456]86|pentium", model):
        return "i386"
    return model


def register(registry: FactRegistry) -> None:
    registry.register("factsversion", lambda r: r.set_execution(lambda: __version__))
    registry.register("pythonversion", lambda r: r.set_execution(platform.python_version))
    registry.register("pythonsitedir", lambda r: r.set_execution(lambda: sysconfig.get_paths().get("purelib")))

    registry.register("kernel", lambda r: r.set_execution("uname -s"))
    registry.register("kernelrelease", lambda r: r.set_execution("uname -r"))
    registry.register("hardwaremodel", lambda r: r.set_execution("uname -m"))

    # Default to the kernel name when nothing more specific applies.
    @registry.resolution("operatingsystem")
    def kernel_as_os():
        return registry.value("kernel")

    @registry.resolution("operatingsystemrelease")
    def kernel_release_as_os_release():
        return registry.value("kernelrelease")

    @registry.resolution("operatingsystem", confine={"kernel": "sunos"})
    def solaris():
        return "Solaris"

    @registry.resolution("operatingsystem", confine={"kernel": "linux"})
    def linux_distribution():
        return detect_linux_distribution()

    @registry.resolution("architecture", confine={"operatingsystem": "debian"})
    def architecture():
        return debian_architecture(registry.value("hardwaremodel"))

    def solaris_command(command):
        def setup(res):
            res.confine(operatingsystem="solaris")
            res.set_execution(command, "/bin/sh")

        return setup

    registry.register("uniqueid", solaris_command("hostid"))
    registry.register("hardwareisa", solaris_command("uname -p"))
