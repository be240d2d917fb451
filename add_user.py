#!/usr/bin/env python3
"""Add a new user with sudoers privileges and access to Git over SSH.

Usage:
    sudo ./add_user.py -u <username> --git-name <fullname> --git-email <email> --git-host <fqdn>

Afterwards open a new terminal, login as <username> and add the printed public
key to your account on the Git host. Check the result with `git config --list`.

To renew the SSH key used for authentication:

    ssh-keygen -q -t rsa -N '' -b 4096 -f ~/.ssh/id_rsa
"""

import sys
from typing import Optional, Sequence

from lib.arg_parser import create_add_user_argument_parser, parse_add_user_args
from lib.config import UserConfig
from lib.host_utils import require_root, user_exists
from lib.logging_utils import get_setup_logger
from lib.setup_common import print_banner, enable_dry_run, execute_steps
from lib.step_sets import USER_PROVISIONING_STEPS


def main(argv: Optional[Sequence[str]] = None) -> int:
    require_root()

    parser = create_add_user_argument_parser(
        "Add a new user with sudoers privileges, and access to Git over SSH."
    )
    args = parse_add_user_args(parser, argv)
    config = UserConfig.from_args(args)

    if user_exists(config.username):
        print(f"Error: User already exists: {config.username}", file=sys.stderr)
        return 1

    if config.dry_run:
        enable_dry_run()

    logger = get_setup_logger("add_user")
    logger.info(f"Provisioning user {config.username} for {config.git_host} (dry-run: {config.dry_run})")

    print_banner("Add User", [
        ("User", config.username),
        ("Git name", config.git_name),
        ("Git email", config.git_email),
        ("Git host", config.git_host),
    ])

    return execute_steps(USER_PROVISIONING_STEPS, config, logger)


if __name__ == "__main__":
    sys.exit(main())
