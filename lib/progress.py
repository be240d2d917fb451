"""Progress display and sequential execution of setup steps."""

from __future__ import annotations

import sys
import time
from logging import getLogger
from typing import Any

from lib.logging_utils import SETUP_LOGGER_NAME
from lib.types import StepFunc, StepList

_logger = getLogger(f"{SETUP_LOGGER_NAME}.steps")


def progress_bar(current: int, total: int, width: int = 20) -> str:
    filled = int(width * current / total) if total > 0 else 0
    bar = "█" * filled + "░" * (width - filled)
    percent = int(100 * current / total) if total > 0 else 0
    return f"[{bar}] {percent}%"


def run_step(step_num: int, total: int, name: str, func: StepFunc, *args: Any, **kwargs: Any) -> Any:
    bar = progress_bar(step_num, total)
    print(f"\n{bar} [{step_num}/{total}] {name}")
    sys.stdout.flush()

    _logger.info(f"[{step_num}/{total}] {name}: started")
    start = time.monotonic()
    try:
        result = func(*args, **kwargs)
    except Exception as e:
        _logger.error(f"[{step_num}/{total}] {name}: failed: {e}")
        raise
    _logger.info(f"[{step_num}/{total}] {name}: completed in {time.monotonic() - start:.1f}s")
    return result


def run_steps(steps: StepList, *args: Any, **kwargs: Any) -> None:
    """Run steps in order, stopping at the first one that raises."""
    total = len(steps)
    for i, (name, func) in enumerate(steps, 1):
        run_step(i, total, name, func, *args, **kwargs)

    bar = progress_bar(total, total)
    print(f"\n{bar} Complete!")
    sys.stdout.flush()
