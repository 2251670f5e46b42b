"""Tests for the built-in fact catalog, with commands faked."""

from unittest.mock import patch

import pytest

from catalog import keys, load_builtin
from facts import FactRegistry

LINUX_OUTPUTS = {
    "uname -s": "Linux",
    "uname -r": "6.1.0-18-amd64",
    "uname -m": "x86_64",
    "hostname": "web1.example.com",
    "whoami": "root",
}

DARWIN_OUTPUTS = {
    "uname -s": "Darwin",
    "uname -r": "R7",
    "uname -m": "Power Macintosh",
    "hostname": "localhost",
    "/usr/sbin/scutil --get LocalHostName": "macbook",
    "/sbin/ifconfig": (
        "lo0: flags=8049<UP,LOOPBACK>\n"
        "\tinet 127.0.0.1 netmask 0xff000000\n"
        "en0: flags=8863<UP,BROADCAST>\n"
        "\tinet 192.168.1.20 netmask 0xffffff00\n"
        "\tether 00:0a:95:9d:68:16\n"
        "\tmedia: autoselect (100baseTX) 10baseT/UTP\n"
    ),
}

DARWIN_R6_OUTPUTS = {
    "uname -s": "Darwin",
    "uname -r": "R6",
    "uname -m": "Power Macintosh",
    "hostname": "localhost",
    "/sbin/ifconfig": "en0: flags=8863<UP,BROADCAST>\n\tHWaddr 00:0a:95:9d:68:16\n",
}


def _load(outputs, distribution="Debian", ip="10.0.0.5"):
    def fake_run(command, interpreter="/bin/sh", timeout=None):
        return outputs.get(command)

    registry = FactRegistry()
    with (
        patch("facts.resolution.run_command", side_effect=fake_run),
        patch("catalog.network.run_command", side_effect=fake_run),
        patch("catalog.system.detect_linux_distribution", return_value=distribution),
        patch("catalog.network.socket.gethostbyname", return_value=ip),
    ):
        load_builtin(registry)
        values = registry.export()
    return registry, values


@pytest.fixture
def no_key_files(monkeypatch, tmp_path):
    monkeypatch.setattr(keys, "SSH_DIRS", [tmp_path / "ssh"])
    monkeypatch.setattr(keys, "CFKEY_FILES", [tmp_path / "cfkey.pub"])


class TestLinux:
    def test_kernel_facts(self, no_key_files):
        _, values = _load(LINUX_OUTPUTS)
        assert values["kernel"] == "Linux"
        assert values["kernelrelease"] == "6.1.0-18-amd64"
        assert values["operatingsystemrelease"] == "6.1.0-18-amd64"
        assert values["hardwaremodel"] == "x86_64"

    def test_distribution_beats_kernel_default(self, no_key_files):
        registry, values = _load(LINUX_OUTPUTS)
        assert values["operatingsystem"] == "Debian"
        # default, solaris (discarded) and linux resolutions
        assert registry.lookup("operatingsystem").count() == 2

    def test_debian_architecture(self, no_key_files):
        _, values = _load(LINUX_OUTPUTS)
        assert values["architecture"] == "amd64"

    def test_no_architecture_off_debian(self, no_key_files):
        _, values = _load(LINUX_OUTPUTS, distribution="Fedora")
        assert values["operatingsystem"] == "Fedora"
        assert "architecture" not in values

    def test_unknown_distribution_falls_back_to_kernel(self, no_key_files):
        _, values = _load(LINUX_OUTPUTS, distribution=None)
        assert values["operatingsystem"] == "Linux"

    def test_naming(self, no_key_files):
        registry, values = _load(LINUX_OUTPUTS)
        assert values["fqdn"] == "web1.example.com"
        assert values["hostname"] == "web1"
        assert values["domain"] == "example.com"
        assert registry.lookup("hostname").ldapname == "cn"

    def test_ipaddress(self, no_key_files):
        _, values = _load(LINUX_OUTPUTS)
        assert values["ipaddress"] == "10.0.0.5"

    def test_loopback_ipaddress_ignored(self, no_key_files):
        _, values = _load(LINUX_OUTPUTS, ip="127.0.0.1")
        assert "ipaddress" not in values

    def test_process_facts(self, no_key_files):
        _, values = _load(LINUX_OUTPUTS)
        assert values["id"] == "root"
        assert values["ps"] == "ps -ef"

    def test_solaris_only_facts_absent(self, no_key_files):
        registry, values = _load(LINUX_OUTPUTS)
        assert registry.lookup("uniqueid").count() == 0
        assert "uniqueid" not in values
        assert "hardwareisa" not in values
        assert "macaddress" not in values

    def test_version_facts(self, no_key_files):
        _, values = _load(LINUX_OUTPUTS)
        assert values["factsversion"] == "0.1.0"
        assert values["pythonversion"].count(".") == 2

    def test_no_keys(self, no_key_files):
        _, values = _load(LINUX_OUTPUTS)
        assert "sshrsakey" not in values
        assert "cfkey" not in values


class TestDarwin:
    def test_scutil_hostname_preferred(self, no_key_files):
        _, values = _load(DARWIN_OUTPUTS)
        assert values["hostname"] == "macbook"
        # the R6 resolution is confined away
        assert "iphostnumber" not in values

    def test_interface_facts(self, no_key_files):
        _, values = _load(DARWIN_OUTPUTS)
        assert values["macaddress"] == "00:0a:95:9d:68:16"
        assert values["operatingsystem"] == "Darwin"

    def test_bsd_ps(self, no_key_files):
        _, values = _load(DARWIN_OUTPUTS)
        assert values["ps"] == "ps -auxwww"

    def test_no_linux_id(self, no_key_files):
        _, values = _load(DARWIN_OUTPUTS)
        assert "id" not in values

    def test_r6_iphostnumber_from_scutil(self, no_key_files):
        registry, values = _load({**DARWIN_R6_OUTPUTS, "/usr/sbin/scutil --get LocalHostName": "macbook"})
        assert registry.lookup("iphostnumber").count() == 2
        assert values["iphostnumber"] == "macbook"
        assert values["hostname"] == "localhost"

    def test_r6_iphostnumber_falls_back_to_hwaddr(self, no_key_files):
        _, values = _load(DARWIN_R6_OUTPUTS)
        assert values["iphostnumber"] == "00:0a:95:9d:68:16"


class TestKeys:
    def test_ssh_key_from_first_directory(self, monkeypatch, tmp_path):
        first, second = tmp_path / "etc-ssh", tmp_path / "etc"
        first.mkdir()
        second.mkdir()
        (second / "ssh_host_rsa_key.pub").write_text("ssh-rsa SECOND\n")
        (first / "ssh_host_rsa_key.pub").write_text("ssh-rsa FIRST\n")
        monkeypatch.setattr(keys, "SSH_DIRS", [first, second])
        monkeypatch.setattr(keys, "CFKEY_FILES", [])

        _, values = _load(LINUX_OUTPUTS)
        assert values["sshrsakey"] == "ssh-rsa FIRST"
        assert "sshdsakey" not in values

    def test_cfkey_strips_armor(self, monkeypatch, tmp_path):
        key = tmp_path / "localhost.pub"
        key.write_text("-----BEGIN RSA PUBLIC KEY-----\nAAAA\nBBBB\n-----END RSA PUBLIC KEY-----\n")
        monkeypatch.setattr(keys, "SSH_DIRS", [])
        monkeypatch.setattr(keys, "CFKEY_FILES", [tmp_path / "missing.pub", key])

        _, values = _load(LINUX_OUTPUTS)
        assert values["cfkey"] == "AAAABBBB"

    def test_undecodable_key_bytes_replaced(self, monkeypatch, tmp_path):
        (tmp_path / "ssh_host_rsa_key.pub").write_bytes(b"ssh-rsa \xff\xfe AAAA\n")
        monkeypatch.setattr(keys, "SSH_DIRS", [tmp_path])
        monkeypatch.setattr(keys, "CFKEY_FILES", [tmp_path / "ssh_host_rsa_key.pub"])

        _, values = _load(LINUX_OUTPUTS)
        assert values["sshrsakey"] == "ssh-rsa \ufffd\ufffd AAAA"
        assert values["cfkey"] == "ssh-rsa \ufffd\ufffd AAAA"
        assert values["kernel"] == "Linux"
