"""Tests for the ubuntu_initial and add_user entry points and step ordering."""

from __future__ import annotations

import io
import logging
import os
import subprocess
import sys
import unittest
from contextlib import redirect_stdout, redirect_stderr
from unittest.mock import patch, MagicMock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import add_user
import ubuntu_initial
from lib.config import HostConfig
from lib.host_utils import set_dry_run, is_dry_run
from lib.setup_common import execute_steps
from lib.step_sets import HOST_BOOTSTRAP_STEPS, USER_PROVISIONING_STEPS


VALID_ARGS = ['-u', 'alice', '--git-name', 'A B', '--git-email', 'a@b.com', '--git-host', 'github.com']

TEST_LOGGER = logging.getLogger("ubuntu_setup.tests")


class TestStepOrder(unittest.TestCase):
    def test_host_bootstrap_order(self):
        names = [func.__name__ for _, func in HOST_BOOTSTRAP_STEPS]
        self.assertEqual(names, [
            "update_package_sources",
            "add_apt_fast_repository",
            "install_apt_fast",
            "configure_apt_fast",
            "install_build_tools",
            "upgrade_packages",
            "upgrade_pip",
            "configure_ntp",
            "harden_ssh",
            "configure_firewall",
            "prompt_reboot",
        ])

    def test_user_provisioning_order(self):
        names = [func.__name__ for _, func in USER_PROVISIONING_STEPS]
        self.assertEqual(names, [
            "create_user",
            "grant_sudo_access",
            "configure_sudo_defaults",
            "generate_ssh_key",
            "configure_ssh_client",
            "configure_git",
            "add_git_aliases",
            "print_next_steps",
        ])


class TestExecuteSteps(unittest.TestCase):
    def test_stops_at_first_failure(self):
        calls = []

        def ok(config):
            calls.append("ok")

        def fail(config):
            calls.append("fail")
            raise subprocess.CalledProcessError(100, "apt-get update -y")

        def never(config):
            calls.append("never")

        steps = [("First", ok), ("Second", fail), ("Third", never)]
        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()) as err:
            code = execute_steps(steps, HostConfig(), TEST_LOGGER)

        self.assertEqual(code, 1)
        self.assertEqual(calls, ["ok", "fail"])
        self.assertIn("Setup failed", err.getvalue())

    def test_os_error_fails(self):
        def missing(config):
            raise FileNotFoundError(2, "No such file", "/etc/sudoers")

        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            code = execute_steps([("Missing", missing)], HostConfig(), TEST_LOGGER)
        self.assertEqual(code, 1)

    def test_interrupt(self):
        def interrupted(config):
            raise KeyboardInterrupt

        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            code = execute_steps([("Interrupted", interrupted)], HostConfig(), TEST_LOGGER)
        self.assertEqual(code, 130)

    def test_success(self):
        with redirect_stdout(io.StringIO()) as out:
            code = execute_steps([("Only", lambda config: None)], HostConfig(), TEST_LOGGER)
        self.assertEqual(code, 0)
        self.assertIn("Complete!", out.getvalue())


class TestUbuntuInitialMain(unittest.TestCase):
    def tearDown(self):
        set_dry_run(False)

    @patch("ubuntu_initial.execute_steps")
    @patch("lib.host_utils.os.geteuid", return_value=1000)
    def test_non_root_exits_1(self, _euid, mock_execute):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                ubuntu_initial.main([])
        self.assertEqual(ctx.exception.code, 1)
        mock_execute.assert_not_called()

    @patch("ubuntu_initial.execute_steps", return_value=0)
    @patch("ubuntu_initial.get_setup_logger", return_value=TEST_LOGGER)
    @patch("lib.host_utils.os.geteuid", return_value=0)
    def test_runs_host_steps(self, _euid, _logger, mock_execute):
        with redirect_stdout(io.StringIO()):
            code = ubuntu_initial.main(["--no-reboot", "--ntp-server", "a.example"])

        self.assertEqual(code, 0)
        steps, config, _ = mock_execute.call_args.args
        self.assertIs(steps, HOST_BOOTSTRAP_STEPS)
        self.assertEqual(config.ntp_servers, ("a.example",))
        self.assertFalse(config.reboot)

    @patch("ubuntu_initial.execute_steps", return_value=1)
    @patch("ubuntu_initial.get_setup_logger", return_value=TEST_LOGGER)
    @patch("lib.host_utils.os.geteuid", return_value=0)
    def test_failure_exit_code(self, _euid, _logger, _execute):
        with redirect_stdout(io.StringIO()):
            self.assertEqual(ubuntu_initial.main([]), 1)

    @patch("ubuntu_initial.execute_steps", return_value=0)
    @patch("ubuntu_initial.get_setup_logger", return_value=TEST_LOGGER)
    @patch("lib.host_utils.os.geteuid", return_value=0)
    def test_dry_run_flag(self, _euid, _logger, _execute):
        with redirect_stdout(io.StringIO()):
            ubuntu_initial.main(["--dry-run"])
        self.assertTrue(is_dry_run())


class TestAddUserMain(unittest.TestCase):
    def tearDown(self):
        set_dry_run(False)

    @patch("add_user.execute_steps")
    @patch("lib.host_utils.os.geteuid", return_value=1000)
    def test_non_root_exits_1_before_parsing(self, _euid, mock_execute):
        err = io.StringIO()
        with redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                add_user.main(["--help"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Please run as root.", err.getvalue())
        mock_execute.assert_not_called()

    @patch("add_user.execute_steps")
    @patch("add_user.user_exists", return_value=True)
    @patch("lib.host_utils.os.geteuid", return_value=0)
    def test_existing_user_refused(self, _euid, _exists, mock_execute):
        err = io.StringIO()
        with redirect_stderr(err):
            code = add_user.main(VALID_ARGS)
        self.assertEqual(code, 1)
        self.assertIn("User already exists: alice", err.getvalue())
        mock_execute.assert_not_called()

    @patch("add_user.execute_steps")
    @patch("lib.host_utils.os.geteuid", return_value=0)
    def test_missing_arguments_exit_1(self, _euid, mock_execute):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                add_user.main(VALID_ARGS[:4])
        self.assertEqual(ctx.exception.code, 1)
        mock_execute.assert_not_called()

    @patch("add_user.execute_steps", return_value=0)
    @patch("add_user.get_setup_logger", return_value=TEST_LOGGER)
    @patch("add_user.user_exists", return_value=False)
    @patch("lib.host_utils.os.geteuid", return_value=0)
    def test_runs_user_steps(self, _euid, _exists, _logger, mock_execute):
        with redirect_stdout(io.StringIO()):
            code = add_user.main(VALID_ARGS)

        self.assertEqual(code, 0)
        steps, config, _ = mock_execute.call_args.args
        self.assertIs(steps, USER_PROVISIONING_STEPS)
        self.assertEqual(config.username, "alice")
        self.assertEqual(config.git_host, "github.com")
        self.assertEqual(config.home, "/home/alice")

    @patch("add_user.get_setup_logger", return_value=TEST_LOGGER)
    @patch("add_user.user_exists", return_value=False)
    @patch("lib.host_utils.os.geteuid", return_value=0)
    def test_failing_step_returns_1(self, _euid, _exists, _logger):
        failing = MagicMock(side_effect=subprocess.CalledProcessError(1, "adduser"))
        never = MagicMock()
        steps = [("Creating user", failing), ("Granting sudo access", never)]

        with patch("add_user.USER_PROVISIONING_STEPS", steps):
            with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
                code = add_user.main(VALID_ARGS)

        self.assertEqual(code, 1)
        never.assert_not_called()


if __name__ == '__main__':
    unittest.main()
