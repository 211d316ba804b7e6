"""Continuation-token pagination layer.

Architecture:
    - executors.py: PageExecutor drives one page fetch per queued task
    - progress.py: ProgressTracker estimates totals for progress reporting
"""

from __future__ import annotations

from .executors import PageExecutor
from .progress import ProgressTracker

__all__ = [
    "PageExecutor",
    "ProgressTracker",
]
