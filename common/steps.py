"""Common setup steps."""

from __future__ import annotations

from .common_steps import (
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

__all__ = [
    'update_package_sources',
    'add_apt_fast_repository',
    'install_apt_fast',
    'configure_apt_fast',
    'install_build_tools',
    'upgrade_packages',
    'upgrade_pip',
    'configure_ntp',
    'prompt_reboot',
]
