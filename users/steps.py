"""User provisioning steps."""

from __future__ import annotations

from .user_steps import (
    create_user,
    generate_ssh_key,
    configure_ssh_client,
    configure_git,
    add_git_aliases,
    print_next_steps,
)

__all__ = [
    'create_user',
    'generate_ssh_key',
    'configure_ssh_client',
    'configure_git',
    'add_git_aliases',
    'print_next_steps',
]
