#!/usr/bin/env python3

import argparse
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple


# https://www.ntppool.org/
NTP_SERVERS = ("ch.pool.ntp.org", "time.google.com")

APT_SOURCES_LIST = "/etc/apt/sources.list"
APT_FAST_CONF = "/etc/apt-fast.conf"
APT_FAST_PPA = "http://ppa.launchpad.net/apt-fast/stable/ubuntu"
APT_FAST_KEYSERVER = "keyserver.ubuntu.com"
APT_FAST_KEY_ID = "A2166B8DE8BDC3367D1901C11EE2FF37CA8DA16B"

NTP_CONF = "/etc/ntp.conf"
NTP_CONF_ORIG = "/etc/ntp.conf.orig"

SSHD_CONFIG = "/etc/ssh/sshd_config"
SSHD_CONFIG_ORIGINAL = "/etc/ssh/sshd_config.original"

SUDOERS = "/etc/sudoers"
SUDO_TIMESTAMP_TIMEOUT = 3600

SSH_KEY_BITS = 4096

# Check available versions with: apt list --installed | grep -i <package name>
PACKAGE_GROUPS = [
    ["build-essential", "ubuntu-drivers-common", "rsync", "pkg-config", "unzip", "tree", "net-tools"],
    ["git", "cmake", "ca-certificates", "bzip2", "bash-completion", "wget"],
    ["software-properties-common", "curl", "grep", "sed", "lsb-release", "dpkg", "libglib2.0-dev", "zlib1g-dev"],
    ["ufw", "less", "htop", "openssh-client", "lsb-release", "dos2unix", "ubuntu-release-upgrader-core"],
    ["libmime-lite-perl", "exuberant-ctags", "pigz"],
    ["python3-pip", "python3-powerline", "ack", "lsyncd", "tmux"],
]

SSHD_HARDENING = [
    ("PasswordAuthentication", "yes"),
    ("ChallengeResponseAuthentication", "no"),
    ("PermitEmptyPasswords", "no"),
    ("PermitRootLogin", "no"),
]


@dataclass(frozen=True)
class FirewallRule:
    ports: Tuple[int, ...]
    proto: str
    comment: str
    app: Optional[str] = None

    def ufw_args(self) -> str:
        if self.app:
            return f"allow {self.app}"
        if len(self.ports) == 1:
            return f"allow {self.ports[0]}/{self.proto}"
        port_list = ",".join(str(p) for p in self.ports)
        return f"allow from any to any port {port_list} proto {self.proto}"


FIREWALL_RULES = [
    FirewallRule((22,), "tcp", "Open port SSH tcp port 22", app="ssh"),
    FirewallRule((53,), "tcp", "Open port DNS tcp port 53"),
    FirewallRule((53,), "udp", "Open port DNS udp port 53"),
    FirewallRule((123,), "udp", "Open port NTP udp port 123"),
    FirewallRule((139, 445), "tcp", "Allow Samba tcp port 139,445"),
    FirewallRule((80, 443), "tcp", "Allow HTTP/HTTPS traffic tcp port 80,443"),
    FirewallRule((25,), "tcp", "Open port Mail server (SMTP) tcp port 25"),
    FirewallRule((587,), "tcp", "Open port Mail server to external IPs tcp port 587"),
]


@dataclass
class HostConfig:
    ntp_servers: Tuple[str, ...] = NTP_SERVERS
    reboot: Optional[bool] = None
    dry_run: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'HostConfig':
        ntp_servers = tuple(args.ntp_servers) if args.ntp_servers else NTP_SERVERS
        return cls(
            ntp_servers=ntp_servers,
            reboot=args.reboot,
            dry_run=args.dry_run,
        )


@dataclass
class UserConfig:
    username: str
    git_name: str
    git_email: str
    git_host: str
    password: Optional[str] = None
    dry_run: bool = False
    home_root: str = field(default="/home", repr=False)

    @property
    def home(self) -> str:
        return os.path.join(self.home_root, self.username)

    @property
    def ssh_dir(self) -> str:
        return os.path.join(self.home, ".ssh")

    @property
    def private_key(self) -> str:
        return os.path.join(self.ssh_dir, "id_rsa")

    @property
    def public_key(self) -> str:
        return f"{self.private_key}.pub"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'UserConfig':
        return cls(
            username=args.username,
            git_name=args.git_name,
            git_email=args.git_email,
            git_host=args.git_host,
            password=getattr(args, 'password', None),
            dry_run=getattr(args, 'dry_run', False),
        )
