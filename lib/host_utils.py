"""Utility functions for local host setup."""

from __future__ import annotations

import os
import re
import shlex
import shutil
import subprocess
import sys
from logging import getLogger
from typing import Iterable, Optional

from lib.logging_utils import SETUP_LOGGER_NAME, log_subprocess_result


_dry_run = False
_logger = getLogger(f"{SETUP_LOGGER_NAME}.commands")


def set_dry_run(enabled: bool) -> None:
    """Set dry-run mode globally."""
    global _dry_run
    _dry_run = enabled


def is_dry_run() -> bool:
    """Check if dry-run mode is enabled."""
    return _dry_run


def require_root() -> None:
    """Exit with status 1 unless running with an effective UID of 0."""
    if os.geteuid() != 0:
        print("Please run as root.", file=sys.stderr)
        sys.exit(1)


def run(cmd: str, check: bool = True, cwd: Optional[str] = None, capture_output: bool = False, text: bool = True) -> subprocess.CompletedProcess[str]:
    """Run a shell command, raising CalledProcessError on failure when check is set."""
    print(f"  Running: {cmd[:80]}..." if len(cmd) > 80 else f"  Running: {cmd}")
    sys.stdout.flush()

    if is_dry_run():
        print("  [DRY-RUN] Command not executed")
        # CompletedProcess.args expects a sequence; provide a one-element list for consistency
        return subprocess.CompletedProcess(args=[cmd], returncode=0, stdout="", stderr="")

    result = subprocess.run(cmd, shell=True, capture_output=capture_output, text=text, cwd=cwd)
    log_subprocess_result(_logger, cmd, result)
    if check and result.returncode != 0:
        if getattr(result, 'stderr', None):
            print(f"    Error: {result.stderr[:200]}")
            sys.stdout.flush()
        raise subprocess.CalledProcessError(result.returncode, cmd, result.stdout, result.stderr)
    return result


def write_file(path: str, content: str, mode: Optional[int] = None) -> None:
    """Write content to path, replacing any existing file."""
    if is_dry_run():
        print(f"  [DRY-RUN] Would write {path}")
        return

    with open(path, "w") as f:
        f.write(content)
    if mode is not None:
        os.chmod(path, mode)
    _logger.info(f"Wrote {path}")


def append_file(path: str, content: str) -> None:
    if is_dry_run():
        print(f"  [DRY-RUN] Would append to {path}")
        return

    with open(path, "a") as f:
        f.write(content)
    _logger.info(f"Appended to {path}")


def append_line_once(path: str, line: str) -> bool:
    """Append line unless the file already holds it. Returns True when appended."""
    if file_contains_line(path, line):
        return False
    append_file(path, line if line.endswith("\n") else line + "\n")
    return True


def copy_file(src: str, dst: str) -> None:
    if is_dry_run():
        print(f"  [DRY-RUN] Would copy {src} to {dst}")
        return
    shutil.copy2(src, dst)


def move_file(src: str, dst: str) -> None:
    if is_dry_run():
        print(f"  [DRY-RUN] Would move {src} to {dst}")
        return
    shutil.move(src, dst)


def make_read_only(path: str) -> None:
    """Drop write permission for everyone (chmod a-w)."""
    if is_dry_run():
        print(f"  [DRY-RUN] Would make {path} read-only")
        return
    mode = os.stat(path).st_mode
    os.chmod(path, mode & ~0o222)


def strip_lines_starting_with(path: str, keys: Iterable[str], backup_suffix: Optional[str] = ".bak") -> int:
    """Remove lines whose first word (after leading whitespace) starts with one of keys.

    The untouched file is kept as path + backup_suffix. Returns the number of
    removed lines.
    """
    pattern = re.compile(r"^\s*(" + "|".join(re.escape(k) for k in keys) + ")")

    with open(path, "r") as f:
        lines = f.readlines()
    kept = [line for line in lines if not pattern.match(line)]
    removed = len(lines) - len(kept)

    if is_dry_run():
        print(f"  [DRY-RUN] Would remove {removed} line(s) from {path}")
        return removed

    if backup_suffix:
        shutil.copy2(path, path + backup_suffix)
    with open(path, "w") as f:
        f.writelines(kept)
    _logger.info(f"Removed {removed} line(s) from {path}")
    return removed


def make_dir(path: str, mode: int) -> None:
    if is_dry_run():
        print(f"  [DRY-RUN] Would create {path}")
        return
    os.makedirs(path, exist_ok=True)
    os.chmod(path, mode)


def chown_path(path: str, owner: str, recursive: bool = False) -> None:
    """Give path (and everything below it when recursive) to owner:owner."""
    safe_owner = shlex.quote(owner)
    flag = "-R " if recursive else ""
    run(f"chown {flag}{safe_owner}:{safe_owner} {shlex.quote(path)}")


def user_exists(username: str) -> bool:
    result = subprocess.run(
        f"id {shlex.quote(username)}",
        shell=True, capture_output=True
    )
    return result.returncode == 0


def file_contains_line(filepath: str, line: str) -> bool:
    target = line.rstrip("\n")
    try:
        with open(filepath, 'r') as f:
            return any(existing.rstrip("\n") == target for existing in f)
    except (FileNotFoundError, PermissionError):
        return False
