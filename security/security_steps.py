"""Security hardening steps."""

from __future__ import annotations

import os
import shlex

from lib.config import (
    HostConfig,
    UserConfig,
    FIREWALL_RULES,
    SSHD_CONFIG,
    SSHD_CONFIG_ORIGINAL,
    SUDOERS,
)
from lib.config_files import (
    render_sshd_hardening,
    sshd_hardening_keys,
    sudoers_defaults_line,
    sudoers_grant_line,
)
from lib.host_utils import (
    run,
    append_file,
    append_line_once,
    copy_file,
    make_read_only,
    strip_lines_starting_with,
)


def harden_ssh(config: HostConfig) -> None:
    # Losing sshd can mean losing the server; check before reloading with:
    # sshd -T | egrep -i 'PermitEmptyPasswords|PermitRootLogin|PasswordAuthentication|ChallengeResponseAuthentication'
    if not os.path.exists(SSHD_CONFIG_ORIGINAL):
        copy_file(SSHD_CONFIG, SSHD_CONFIG_ORIGINAL)
        make_read_only(SSHD_CONFIG_ORIGINAL)
    else:
        print(f"  Original already preserved at {SSHD_CONFIG_ORIGINAL}")

    removed = strip_lines_starting_with(SSHD_CONFIG, sshd_hardening_keys())
    if removed:
        print(f"  Removed {removed} existing setting(s) from {SSHD_CONFIG}")
    append_file(SSHD_CONFIG, render_sshd_hardening())

    run("systemctl reload ssh")

    print("  ✓ SSH hardened (no root login, no empty passwords, no challenge-response)")


def configure_firewall(config: HostConfig) -> None:
    run("ufw default deny incoming")
    run("ufw default allow outgoing")

    for rule in FIREWALL_RULES:
        run(f"ufw {rule.ufw_args()} comment {shlex.quote(rule.comment)}")

    run("ufw --force enable")

    ports = sorted({port for rule in FIREWALL_RULES for port in rule.ports})
    print(f"  ✓ Firewall enabled (allowed ports: {', '.join(str(p) for p in ports)})")


def grant_sudo_access(config: UserConfig) -> None:
    if append_line_once(SUDOERS, sudoers_grant_line(config.username)):
        print(f"  ✓ Passwordless sudo granted to {config.username}")
    else:
        print(f"  ✓ {config.username} already listed in {SUDOERS}")


def configure_sudo_defaults(config: UserConfig) -> None:
    strip_lines_starting_with(SUDOERS, ["Defaults"])
    append_file(SUDOERS, sudoers_defaults_line())

    print("  ✓ sudoers defaults configured (timestamp_timeout)")
