"""Security hardening steps."""

from __future__ import annotations

from .security_steps import (
    harden_ssh,
    configure_firewall,
    grant_sudo_access,
    configure_sudo_defaults,
)

__all__ = [
    'harden_ssh',
    'configure_firewall',
    'grant_sudo_access',
    'configure_sudo_defaults',
]
