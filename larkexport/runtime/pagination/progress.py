"""Progress estimation for paginated message retrieval.

The API never reports a total, so the estimate guesses the remaining volume
as one page worth of slack while more pages remain. It can overshoot and
undershoot before the final page and is exact only once pagination ends.
"""

from __future__ import annotations

from ...models.page import ProgressEstimate


class ProgressTracker:
    """Tracks processed count and a heuristic total across pages."""

    def __init__(self, page_size: int) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self._page_size = page_size
        self._pages = 0
        self._estimate = ProgressEstimate()

    @property
    def estimate(self) -> ProgressEstimate:
        return self._estimate

    @property
    def pages(self) -> int:
        return self._pages

    def update(self, item_count: int, has_more: bool) -> ProgressEstimate:
        """Fold one received page into the estimate."""
        self._pages += 1
        processed = self._estimate.processed + item_count

        if self._pages == 1:
            if item_count < self._page_size and not has_more:
                estimated_total = processed
            else:
                estimated_total = processed + (self._page_size if has_more else 0)
        elif has_more:
            estimated_total = processed + self._page_size
        else:
            estimated_total = processed

        self._estimate = ProgressEstimate(
            processed=processed, estimated_total=estimated_total, has_more=has_more
        )
        return self._estimate

    def finalize(self) -> ProgressEstimate:
        """Pin the estimate to the exact processed count."""
        processed = self._estimate.processed
        self._estimate = ProgressEstimate(
            processed=processed, estimated_total=processed, has_more=False
        )
        return self._estimate
