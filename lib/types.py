"""Type aliases shared across setup modules."""
from __future__ import annotations

from typing import Any, Callable

# A step takes the script's config object and raises on failure
StepFunc = Callable[..., Any]
StepList = list[tuple[str, StepFunc]]

__all__ = [
    "StepFunc",
    "StepList",
]
