"""User account, SSH and Git setup steps."""

from __future__ import annotations

import os
import shlex
import subprocess
from logging import getLogger

from lib.config import UserConfig, SSH_KEY_BITS
from lib.config_files import render_ssh_client_config, render_gitconfig, render_git_aliases
from lib.host_utils import run, is_dry_run, write_file, append_file, make_dir, chown_path
from lib.logging_utils import SETUP_LOGGER_NAME, log_subprocess_result

_logger = getLogger(f"{SETUP_LOGGER_NAME}.commands")


def set_user_password(username: str, password: str) -> None:
    if is_dry_run():
        print(f"  [DRY-RUN] Would set password for {username}")
        return

    process = subprocess.run(
        ["chpasswd"],
        input=f"{username}:{password}\n",
        text=True,
        capture_output=True
    )
    log_subprocess_result(_logger, f"chpasswd (password for {username})", process)
    if process.returncode != 0:
        raise subprocess.CalledProcessError(process.returncode, "chpasswd", process.stdout, process.stderr)


def create_user(config: UserConfig) -> None:
    safe_username = shlex.quote(config.username)
    safe_home = shlex.quote(config.home)

    if config.password:
        run(f"adduser --home {safe_home} --shell /bin/bash --quiet --disabled-password --gecos '' {safe_username}")
        set_user_password(config.username, config.password)
        print("  Password set")
    else:
        # adduser asks for the password interactively
        run(f"adduser --home {safe_home} --shell /bin/bash --quiet --gecos '' {safe_username}")

    run(f"usermod -aG sudo {safe_username}")
    chown_path(config.home, config.username, recursive=True)

    print(f"  ✓ User {config.username} created with sudo group membership")


def generate_ssh_key(config: UserConfig) -> None:
    """Generate an RSA key pair for the Git host at ~/.ssh/id_rsa."""
    if os.path.exists(config.private_key):
        print(f"  ✓ SSH key already exists for {config.username}, keeping it")
        return

    make_dir(config.ssh_dir, 0o700)
    run(f"ssh-keygen -q -t rsa -N '' -b {SSH_KEY_BITS} -f {shlex.quote(config.private_key)}")

    print(f"  ✓ SSH key generated for {config.username} (~/.ssh/id_rsa, {SSH_KEY_BITS} bits)")


def configure_ssh_client(config: UserConfig) -> None:
    make_dir(config.ssh_dir, 0o700)
    ssh_config = os.path.join(config.ssh_dir, "config")
    write_file(ssh_config, render_ssh_client_config(config.git_host), mode=0o600)
    chown_path(config.ssh_dir, config.username, recursive=True)

    print(f"  ✓ SSH client configured for {config.git_host}")


def configure_git(config: UserConfig) -> None:
    gitconfig = os.path.join(config.home, ".gitconfig")
    write_file(gitconfig, render_gitconfig(config.git_name, config.git_email))
    chown_path(gitconfig, config.username)

    print(f"  ✓ Git configured ({config.git_name} <{config.git_email}>)")


def add_git_aliases(config: UserConfig) -> None:
    bash_aliases = os.path.join(config.home, ".bash_aliases")
    append_file(bash_aliases, render_git_aliases())
    chown_path(bash_aliases, config.username)

    print("  ✓ Git aliases added (commit, fixes)")


def print_next_steps(config: UserConfig) -> None:
    print()
    print(f"Open a new terminal and login as {config.username}")
    print(f"Copy-Paste the public key to your account on {config.git_host}")
    print()

    if is_dry_run():
        print(f"  [DRY-RUN] Would print {config.public_key}")
        return

    with open(config.public_key, "r") as f:
        print(f.read().rstrip("\n"))
    print()
