"""Shared helpers for the Ubuntu setup scripts."""

from __future__ import annotations

from .config import HostConfig, UserConfig
from .host_utils import run, set_dry_run, is_dry_run

__all__ = [
    "HostConfig",
    "UserConfig",
    "run",
    "set_dry_run",
    "is_dry_run",
]
