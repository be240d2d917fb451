#!/usr/bin/env python3
"""Initial configuration for a fresh Ubuntu 18.04 LTS server.

Installs apt-fast and the required build tools, configures time sync (ntp),
hardens the SSH daemon and enables the firewall (ufw), then offers to reboot.

Usage:
    sudo ./ubuntu_initial.py
    sudo ./ubuntu_initial.py --no-reboot
    sudo ./ubuntu_initial.py --ntp-server 0.pool.ntp.org --ntp-server 1.pool.ntp.org
    sudo ./ubuntu_initial.py --dry-run

Since losing sshd might mean losing your way to reach the server, check the
SSH configuration before restarting:

    sudo sshd -T | egrep -i 'PermitEmptyPasswords|PermitRootLogin|PasswordAuthentication|ChallengeResponseAuthentication'
"""

import sys
from typing import Optional, Sequence

from lib.arg_parser import create_host_argument_parser
from lib.config import HostConfig
from lib.host_utils import require_root
from lib.logging_utils import get_setup_logger
from lib.setup_common import print_banner, enable_dry_run, execute_steps
from lib.step_sets import HOST_BOOTSTRAP_STEPS


def main(argv: Optional[Sequence[str]] = None) -> int:
    require_root()

    parser = create_host_argument_parser("Ubuntu Initial Setup")
    args = parser.parse_args(argv)
    config = HostConfig.from_args(args)

    if config.dry_run:
        enable_dry_run()

    logger = get_setup_logger("ubuntu_initial")
    logger.info(f"Starting host bootstrap (ntp: {', '.join(config.ntp_servers)}, dry-run: {config.dry_run})")

    reboot = "Ask" if config.reboot is None else ("Yes" if config.reboot else "No")
    print_banner("Ubuntu Initial Setup", [
        ("NTP servers", ", ".join(config.ntp_servers)),
        ("Reboot", reboot),
    ])

    return execute_steps(HOST_BOOTSTRAP_STEPS, config, logger)


if __name__ == "__main__":
    sys.exit(main())
