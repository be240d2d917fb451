"""Configuration file content generators for host and user setup."""

from __future__ import annotations

from typing import Iterable

from lib.config import SSHD_HARDENING, SUDO_TIMESTAMP_TIMEOUT


APT_FAST_DOWNLOADER = (
    "aria2c --no-conf -c -j 5 -x 10 -s 8 --min-split-size=1M "
    "--stream-piece-selector=default -i /tmp/apt-fast.list "
    "--connect-timeout=600 --timeout=600 -m0 --header \"Accept: */*\""
)


def apt_fast_sources_line(codename: str, ppa_url: str) -> str:
    return f"deb {ppa_url} {codename} main\n"


def render_apt_fast_conf() -> str:
    return f"""_APTMGR=apt
DOWNLOADBEFORE=true
DLLIST='/tmp/apt-fast.list'
_DOWNLOADER='{APT_FAST_DOWNLOADER}'
DLDIR='/var/cache/apt/apt-fast'
APTCACHE='/var/cache/apt/archives'
"""


def render_ntp_conf(servers: Iterable[str]) -> str:
    content = """driftfile /var/lib/ntp/drift

logfile /var/log/ntp.log

restrict 127.0.0.1 mask 255.0.0.0

disable monitor

"""
    for server in servers:
        content += f"server {server}\n"
    return content


def render_sshd_hardening() -> str:
    return "".join(f"{key} {value}\n" for key, value in SSHD_HARDENING)


def sshd_hardening_keys() -> list[str]:
    return [key for key, _ in SSHD_HARDENING]


def sudoers_grant_line(username: str) -> str:
    return f"{username}  ALL=(ALL:ALL) NOPASSWD:ALL\n"


def sudoers_defaults_line() -> str:
    return f"Defaults        timestamp_timeout={SUDO_TIMESTAMP_TIMEOUT}\n"


def render_ssh_client_config(git_host: str) -> str:
    """Client config: keepalive for every host plus a publickey-only block for the Git host."""
    return f"""Host *
  ServerAliveInterval 60
  StrictHostKeyChecking no

Host {git_host}
  User git
  Port 22
  Hostname {git_host}
  TCPKeepAlive yes
  PreferredAuthentications publickey
  IdentityFile ~/.ssh/id_rsa
"""


def render_gitconfig(name: str, email: str) -> str:
    return f"""[user]
        name = {name}
        email = {email}

[push]
        default = simple

[credential]
        helper = cache --timeout=7200

[filter "lfs"]
        clean = git-lfs clean -- %f
        smudge = git-lfs smudge -- %f
        process = git-lfs filter-process
        required = true

[pull]
        rebase = true

[rebase]
        autoStash = true

[submodule]
        recurse = true

[diff]
        submodule = log

[status]
        submodulesummary = 1

[branch]
        autosetuprebase = always

[core]
        filemode = false
"""


def render_git_aliases() -> str:
    return """
# Add aliases for git
# Example 1: commit 'my comment here ...'
# Example 2: fixes comment
commit () { git commit -am "${1}" && git push; }
fixes () { git commit -am "fixes #${1}" && git push; }
"""
