"""Package, time sync and reboot steps for the initial host setup."""

from __future__ import annotations

import os

from lib.config import (
    HostConfig,
    APT_SOURCES_LIST,
    APT_FAST_CONF,
    APT_FAST_PPA,
    APT_FAST_KEYSERVER,
    APT_FAST_KEY_ID,
    NTP_CONF,
    NTP_CONF_ORIG,
    PACKAGE_GROUPS,
)
from lib.config_files import apt_fast_sources_line, render_apt_fast_conf, render_ntp_conf
from lib.host_utils import run, is_dry_run, write_file, move_file, append_line_once


def update_package_sources(config: HostConfig) -> None:
    run("apt-get update -y")
    # gnupg is needed by apt-key
    run("apt-get install gnupg -y")

    print("  ✓ Package lists updated")


def add_apt_fast_repository(config: HostConfig) -> None:
    result = run("lsb_release -cs", capture_output=True)
    codename = result.stdout.strip() or "<codename>"

    line = apt_fast_sources_line(codename, APT_FAST_PPA)
    if append_line_once(APT_SOURCES_LIST, line):
        print(f"  Added apt-fast PPA ({codename}) to {APT_SOURCES_LIST}")
    else:
        print(f"  apt-fast PPA already listed in {APT_SOURCES_LIST}")

    run(f"apt-key adv --keyserver {APT_FAST_KEYSERVER} --recv-keys {APT_FAST_KEY_ID}")
    run("apt-get update")

    print("  ✓ apt-fast repository configured")


def install_apt_fast(config: HostConfig) -> None:
    os.environ["DEBIAN_FRONTEND"] = "noninteractive"
    run("apt-get -qy install apt-fast")

    print("  ✓ apt-fast installed")


def configure_apt_fast(config: HostConfig) -> None:
    write_file(APT_FAST_CONF, render_apt_fast_conf())
    run(f"chown root:root {APT_FAST_CONF}")

    print(f"  ✓ apt-fast configured ({APT_FAST_CONF})")


def install_build_tools(config: HostConfig) -> None:
    for group in PACKAGE_GROUPS:
        run(f"apt-fast -qy install {' '.join(group)}")

    total = sum(len(group) for group in PACKAGE_GROUPS)
    print(f"  ✓ Build tools installed ({total} packages)")


def upgrade_packages(config: HostConfig) -> None:
    run(
        "env DEBIAN_FRONTEND=noninteractive APT_LISTCHANGES_FRONTEND=mail "
        "apt-fast full-upgrade -qy "
        "-o Dpkg::Options::='--force-confdef' -o Dpkg::Options::='--force-confold'"
    )
    run("apt -qy autoremove")

    print("  ✓ System packages upgraded")


def upgrade_pip(config: HostConfig) -> None:
    run("python3 -m pip install pip -Uq")

    print("  ✓ pip upgraded")


def configure_ntp(config: HostConfig) -> None:
    # ntpd replaces systemd-timesyncd
    run("timedatectl set-ntp no")
    run("apt-fast -qy install ntp ntpdate")

    if not os.path.exists(NTP_CONF_ORIG):
        move_file(NTP_CONF, NTP_CONF_ORIG)
    else:
        print(f"  Original already preserved at {NTP_CONF_ORIG}")

    write_file(NTP_CONF, render_ntp_conf(config.ntp_servers))
    run("service ntp restart")

    print(f"  ✓ Time synchronization configured (ntp: {', '.join(config.ntp_servers)})")


def prompt_reboot(config: HostConfig) -> None:
    print()
    print("We need to reboot your machine to ensure kernel upgrades are installed.")

    reboot = config.reboot
    if reboot is None:
        if is_dry_run():
            print("  [DRY-RUN] Skipping reboot prompt")
            return
        try:
            answer = input('When you are ready, type "y" to reboot. ')
        except EOFError:
            answer = ""
        reboot = answer.startswith("y")

    if reboot:
        run("reboot")
    else:
        print("You chose not to reboot now. When ready, type: 'shutdown -r now' or 'reboot'.")
