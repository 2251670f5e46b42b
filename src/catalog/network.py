"""Host naming and network address facts."""

import re
import socket
from pathlib import Path
from typing import Optional

import structlog

from facts import FactRegistry, run_command

logger = structlog.get_logger()

RESOLV_CONF = Path("/etc/resolv.conf")

_FQDN_RE = re.compile(r"^([\w-]+)\.(.+)$")
_IPV4_RE = re.compile(r"inet ([0-9]+\.[0-9]+\.[0-9]+\.[0-9]+)")
_MAC_RE = r"(\w{1,2}:\w{1,2}:\w{1,2}:\w{1,2}:\w{1,2}:\w{1,2})"


def split_fqdn(name: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Split ``host.example.com`` into ``("host", "example.com")``."""
    if not name:
        return None, None
    match = _FQDN_RE.match(name)
    if match:
        return match.group(1), match.group(2)
    return name, None


def parse_resolv_conf(text: str) -> Optional[str]:
    """Domain from a resolv.conf: the ``domain`` line, else the first ``search`` entry."""
    for keyword in ("domain", "search"):
        match = re.search(rf"^\s*{keyword}\s+(\S+)", text, re.MULTILINE)
        if match:
            return match.group(1)
    return None


def _interface_sections(output: str) -> list[str]:
    return re.split(r"^\S", output, flags=re.MULTILINE)


def parse_ifconfig_ip(output: Optional[str]) -> Optional[str]:
    """First non-loopback IPv4 address in ifconfig output."""
    if not output:
        return None
    for section in _interface_sections(output):
        match = _IPV4_RE.search(section)
        if match and not match.group(1).startswith("127."):
            return match.group(1)
    return None


def parse_solaris_mac(output: Optional[str]) -> Optional[str]:
    if not output:
        return None
    match = re.search(r"ether " + _MAC_RE, output)
    return match.group(1) if match else None


def parse_hwaddr(output: Optional[str]) -> Optional[str]:
    if not output:
        return None
    match = re.search(r"HWaddr (\w\w:\w\w:\w\w:\w\w:\w\w:\w\w)", output)
    return match.group(1) if match else None


def parse_darwin_mac(output: Optional[str]) -> Optional[str]:
    """MAC address of the wired (10baseT) interface."""
    if not output:
        return None
    ether = None
    for section in _interface_sections(output):
        if "10baseT" in section:
            match = re.search(r"ether " + _MAC_RE, section)
            if match:
                ether = match.group(1)
    return ether


def register(registry: FactRegistry) -> None:
    def run(command: str) -> Optional[str]:
        return run_command(command, interpreter=registry.default_interpreter, timeout=registry.command_timeout)

    registry.register("fqdn", lambda r: r.set_execution("hostname"))

    @registry.resolution("hostname", ldapname="cn")
    def hostname():
        return split_fqdn(registry.value("fqdn"))[0]

    def local_hostname(release: str):
        def setup(res):
            res.confine(kernel="darwin", kernelrelease=release)
            res.set_execution("/usr/sbin/scutil --get LocalHostName")

        return setup

    registry.register("hostname", local_hostname("R7"))
    registry.register("iphostnumber", local_hostname("R6"))

    @registry.resolution("iphostnumber", confine={"kernel": "darwin", "kernelrelease": "R6"})
    def iphostnumber_from_ifconfig():
        return parse_hwaddr(run("/sbin/ifconfig"))

    @registry.resolution("domain")
    def domain_from_fqdn():
        return split_fqdn(registry.value("fqdn"))[1]

    @registry.resolution("domain")
    def domain_from_domainname():
        domain = run("domainname")
        # NIS reports "(none)" when unset; require something dotted
        if domain and re.match(r".+\..+", domain):
            return domain
        return None

    @registry.resolution("domain")
    def domain_from_resolv_conf():
        if not RESOLV_CONF.exists():
            return None
        try:
            return parse_resolv_conf(RESOLV_CONF.read_text(errors="replace"))
        except OSError as e:
            logger.debug("resolv_conf_unreadable", error=str(e))
            return None

    @registry.resolution("ipaddress", ldapname="iphostnumber")
    def ipaddress_from_hostname():
        name = registry.value("hostname")
        if not name:
            return None
        try:
            ip = socket.gethostbyname(name)
        except OSError as e:
            logger.debug("hostname_lookup_failed", hostname=name, error=str(e))
            return None
        if ip == "127.0.0.1":
            return None
        return ip

    @registry.resolution("ipaddress", confine={"kernel": "darwin"})
    def ipaddress_from_ifconfig():
        return parse_ifconfig_ip(run("/sbin/ifconfig"))

    @registry.resolution("macaddress", confine={"operatingsystem": "solaris"})
    def solaris_macaddress():
        return parse_solaris_mac(run("/sbin/ifconfig -a"))

    @registry.resolution("macaddress", confine={"kernel": "darwin"})
    def darwin_macaddress():
        return parse_darwin_mac(run("/sbin/ifconfig"))
