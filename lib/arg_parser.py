#!/usr/bin/env python3

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Optional, Sequence


ADD_USER_EXAMPLE = 'example: sudo {prog} -u <username> --git-name "<fullname>" --git-email <email> --git-host <fqdn>'

HELP_FLAGS = ("-h", "--help")

# Flags that always consume the next token, even one starting with a dash
VALUE_FLAGS = {
    "-u": "--username",
    "--username": "--username",
    "--git-name": "--git-name",
    "--git-email": "--git-email",
    "--git-host": "--git-host",
    "-p": "--password",
    "--password": "--password",
}


class SetupArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad invocations with exit status 1."""

    def __init__(self, *args, example: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.example_template = example

    @property
    def example(self) -> Optional[str]:
        if not self.example_template:
            return None
        return self.example_template.format(prog=self.prog)

    def format_help(self) -> str:
        help_text = super().format_help()
        if self.example:
            help_text += f"\n{self.example}\n"
        return help_text

    def print_example(self, file=None) -> None:
        if self.example:
            print(self.example, file=file)
        else:
            self.print_usage(file)

    def error(self, message: str) -> NoReturn:
        print(f"{self.prog}: {message}", file=sys.stderr)
        self.print_example(sys.stderr)
        sys.exit(1)


def create_host_argument_parser(description: str) -> SetupArgumentParser:
    parser = SetupArgumentParser(description=description, allow_abbrev=False)
    parser.add_argument("--ntp-server", dest="ntp_servers",
                       action="append", metavar="HOST",
                       help="NTP server to sync with (can be used multiple times, replaces the default pool)")
    parser.add_argument("--reboot", dest="reboot",
                       action=argparse.BooleanOptionalAction,
                       default=None,
                       help="Reboot (or not) when done instead of asking")
    parser.add_argument("--dry-run", action="store_true",
                       help="Show what would be done without executing commands")
    return parser


def create_add_user_argument_parser(description: str) -> SetupArgumentParser:
    parser = SetupArgumentParser(
        description=description,
        example=ADD_USER_EXAMPLE,
        allow_abbrev=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-u", "--username",
                       help="Identification with access to the machine")
    parser.add_argument("--git-name", dest="git_name",
                       help="Set a name associate commits with an identity for git configuration (eg: 'John Doe')")
    parser.add_argument("--git-email", dest="git_email",
                       help="Set an email for git configuration (eg: john.doe@xxx.com)")
    parser.add_argument("--git-host", dest="git_host",
                       help="Set a hostname for git configuration (eg: github.com)")
    parser.add_argument("-p", "--password",
                       help="Set the account password instead of being prompted by adduser")
    parser.add_argument("--dry-run", action="store_true",
                       help="Show what would be done without executing commands")
    return parser


def join_flag_values(argv: Sequence[str]) -> list[str]:
    """Bind each value flag to the token after it as `--flag=value`."""
    joined = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in VALUE_FLAGS and i + 1 < len(argv):
            joined.append(f"{VALUE_FLAGS[arg]}={argv[i + 1]}")
            i += 2
        else:
            joined.append(arg)
            i += 1
    return joined


def parse_add_user_args(parser: SetupArgumentParser, argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse user provisioning arguments.

    Help wins over everything else on the command line; otherwise any of the
    four mandatory values being absent or empty is a usage error.
    """
    argv = list(sys.argv[1:] if argv is None else argv)

    if any(arg in HELP_FLAGS for arg in argv):
        parser.print_help()
        sys.exit(0)

    args = parser.parse_args(join_flag_values(argv))

    mandatory = [
        ("-u/--username", args.username),
        ("--git-name", args.git_name),
        ("--git-email", args.git_email),
        ("--git-host", args.git_host),
    ]
    missing = [flag for flag, value in mandatory if not value]
    if missing:
        parser.error(f"missing mandatory argument(s): {', '.join(missing)}")

    return args
