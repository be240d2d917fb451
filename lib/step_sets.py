"""Ordered step lists for host bootstrap and user provisioning."""

from __future__ import annotations

from lib.types import StepList

from common.steps import (
    update_package_sources,
    add_apt_fast_repository,
    install_apt_fast,
    configure_apt_fast,
    install_build_tools,
    upgrade_packages,
    upgrade_pip,
    configure_ntp,
    prompt_reboot,
)

from security.steps import (
    harden_ssh,
    configure_firewall,
    grant_sudo_access,
    configure_sudo_defaults,
)

from users.steps import (
    create_user,
    generate_ssh_key,
    configure_ssh_client,
    configure_git,
    add_git_aliases,
    print_next_steps,
)


HOST_BOOTSTRAP_STEPS: StepList = [
    ("Updating package sources", update_package_sources),
    ("Adding apt-fast repository", add_apt_fast_repository),
    ("Installing apt-fast", install_apt_fast),
    ("Configuring apt-fast", configure_apt_fast),
    ("Installing build tools", install_build_tools),
    ("Upgrading packages", upgrade_packages),
    ("Upgrading pip", upgrade_pip),
    ("Configuring time synchronization (ntp)", configure_ntp),
    ("Hardening SSH configuration", harden_ssh),
    ("Configuring firewall", configure_firewall),
    ("Finishing up", prompt_reboot),
]

USER_PROVISIONING_STEPS: StepList = [
    ("Creating user", create_user),
    ("Granting sudo access", grant_sudo_access),
    ("Configuring sudoers defaults", configure_sudo_defaults),
    ("Generating SSH key", generate_ssh_key),
    ("Configuring SSH client", configure_ssh_client),
    ("Configuring Git", configure_git),
    ("Adding Git aliases", add_git_aliases),
    ("Printing next steps", print_next_steps),
]
