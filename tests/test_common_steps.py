"""Tests for common.common_steps: apt-fast, build tools, ntp and the reboot prompt."""

from __future__ import annotations

import io
import os
import subprocess
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from lib.config import HostConfig, PACKAGE_GROUPS
from lib.host_utils import set_dry_run
from common.common_steps import (
    add_apt_fast_repository,
    configure_apt_fast,
    install_build_tools,
    configure_ntp,
    prompt_reboot,
)


def _completed(stdout=""):
    return subprocess.CompletedProcess(args=["x"], returncode=0, stdout=stdout, stderr="")


def _commands(mock_run):
    return [args[0] for args, _ in mock_run.call_args_list]


class TempDirTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def path(self, name):
        return os.path.join(self.tmpdir.name, name)


class TestAddAptFastRepository(TempDirTestCase):
    @patch("common.common_steps.run", return_value=_completed("bionic\n"))
    def test_appends_ppa_once(self, mock_run):
        sources = self.path("sources.list")
        with open(sources, "w") as f:
            f.write("deb http://archive.ubuntu.com/ubuntu bionic main\n")

        with patch("common.common_steps.APT_SOURCES_LIST", sources), redirect_stdout(io.StringIO()):
            add_apt_fast_repository(HostConfig())
            add_apt_fast_repository(HostConfig())

        with open(sources) as f:
            content = f.read()
        self.assertEqual(content.count("deb http://ppa.launchpad.net/apt-fast/stable/ubuntu bionic main\n"), 1)
        self.assertIn(
            "apt-key adv --keyserver keyserver.ubuntu.com --recv-keys A2166B8DE8BDC3367D1901C11EE2FF37CA8DA16B",
            _commands(mock_run),
        )


class TestConfigureAptFast(TempDirTestCase):
    @patch("common.common_steps.run")
    def test_writes_conf(self, mock_run):
        conf = self.path("apt-fast.conf")
        with patch("common.common_steps.APT_FAST_CONF", conf), redirect_stdout(io.StringIO()):
            configure_apt_fast(HostConfig())

        with open(conf) as f:
            self.assertIn("_APTMGR=apt", f.read())
        mock_run.assert_called_once_with(f"chown root:root {conf}")


class TestInstallBuildTools(unittest.TestCase):
    @patch("common.common_steps.run")
    def test_one_apt_fast_call_per_group(self, mock_run):
        with redirect_stdout(io.StringIO()):
            install_build_tools(HostConfig())

        commands = _commands(mock_run)
        self.assertEqual(len(commands), len(PACKAGE_GROUPS))
        self.assertTrue(all(cmd.startswith("apt-fast -qy install ") for cmd in commands))
        self.assertIn("build-essential", commands[0])


class TestConfigureNtp(TempDirTestCase):
    def setUp(self):
        super().setUp()
        self.ntp_conf = self.path("ntp.conf")
        self.ntp_orig = self.path("ntp.conf.orig")
        with open(self.ntp_conf, "w") as f:
            f.write("pool ntp.ubuntu.com\n")
        for p in (
            patch("common.common_steps.NTP_CONF", self.ntp_conf),
            patch("common.common_steps.NTP_CONF_ORIG", self.ntp_orig),
        ):
            p.start()
            self.addCleanup(p.stop)

    @patch("common.common_steps.run")
    def test_preserves_original_and_writes_servers(self, mock_run):
        with redirect_stdout(io.StringIO()):
            configure_ntp(HostConfig())

        with open(self.ntp_orig) as f:
            self.assertEqual(f.read(), "pool ntp.ubuntu.com\n")
        with open(self.ntp_conf) as f:
            content = f.read()
        self.assertIn("server ch.pool.ntp.org\n", content)
        self.assertIn("server time.google.com\n", content)

        commands = _commands(mock_run)
        self.assertEqual(commands[0], "timedatectl set-ntp no")
        self.assertEqual(commands[-1], "service ntp restart")

    @patch("common.common_steps.run")
    def test_rerun_keeps_first_original(self, _run):
        with redirect_stdout(io.StringIO()):
            configure_ntp(HostConfig(ntp_servers=("a.example",)))
            configure_ntp(HostConfig(ntp_servers=("b.example",)))

        with open(self.ntp_orig) as f:
            self.assertEqual(f.read(), "pool ntp.ubuntu.com\n")
        with open(self.ntp_conf) as f:
            self.assertIn("server b.example", f.read())


class TestPromptReboot(unittest.TestCase):
    def tearDown(self):
        set_dry_run(False)

    @patch("common.common_steps.run")
    @patch("builtins.input", return_value="yes")
    def test_yes_reboots(self, _input, mock_run):
        with redirect_stdout(io.StringIO()):
            prompt_reboot(HostConfig())
        mock_run.assert_called_once_with("reboot")

    @patch("common.common_steps.run")
    @patch("builtins.input", return_value="n")
    def test_no_does_not_reboot(self, _input, mock_run):
        out = io.StringIO()
        with redirect_stdout(out):
            prompt_reboot(HostConfig())
        mock_run.assert_not_called()
        self.assertIn("You chose not to reboot now", out.getvalue())

    @patch("common.common_steps.run")
    @patch("builtins.input", side_effect=EOFError)
    def test_end_of_input_does_not_reboot(self, _input, mock_run):
        with redirect_stdout(io.StringIO()):
            prompt_reboot(HostConfig())
        mock_run.assert_not_called()

    @patch("common.common_steps.run")
    @patch("builtins.input")
    def test_flag_skips_prompt(self, mock_input, mock_run):
        with redirect_stdout(io.StringIO()):
            prompt_reboot(HostConfig(reboot=True))
        mock_input.assert_not_called()
        mock_run.assert_called_once_with("reboot")

    @patch("common.common_steps.run")
    @patch("builtins.input")
    def test_dry_run_skips_prompt(self, mock_input, mock_run):
        set_dry_run(True)
        with redirect_stdout(io.StringIO()):
            prompt_reboot(HostConfig())
        mock_input.assert_not_called()
        mock_run.assert_not_called()


if __name__ == '__main__':
    unittest.main()
