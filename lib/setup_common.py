#!/usr/bin/env python3

import subprocess
import sys
from logging import Logger
from typing import Any

from lib.host_utils import set_dry_run
from lib.progress import run_steps
from lib.types import StepList


def print_banner(title: str, details: list[tuple[str, Any]]) -> None:
    print("=" * 60)
    print(title)
    print("=" * 60)
    for label, value in details:
        print(f"{label}: {value}")
    print("=" * 60)
    sys.stdout.flush()


def enable_dry_run() -> None:
    set_dry_run(True)
    print("=" * 60)
    print("DRY-RUN MODE ENABLED")
    print("=" * 60)


def execute_steps(steps: StepList, config: Any, logger: Logger) -> int:
    """Run steps against config and turn the outcome into an exit status."""
    try:
        run_steps(steps, config)
    except subprocess.CalledProcessError as e:
        logger.error(f"Setup failed: command exited with {e.returncode}: {e.cmd}")
        print(f"\n✗ Setup failed (exit code {e.returncode}): {e.cmd}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error(f"Setup failed: {e}")
        print(f"\n✗ Setup failed: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.warning("Setup interrupted")
        print("\n✗ Setup interrupted", file=sys.stderr)
        return 130

    logger.info("Setup complete")
    return 0
