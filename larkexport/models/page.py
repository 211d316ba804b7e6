"""Page and progress models for paginated endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PageResult(BaseModel):
    """One page returned by a list endpoint.

    ``has_more`` is false iff ``page_token`` is absent. A server reply that
    says "more" without a token cannot be continued, so it is treated as the
    last page; a "no more" reply drops any stray token.
    """

    items: list[dict[str, Any]] = Field(default_factory=list)
    page_token: str | None = None
    has_more: bool = False

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_continuation(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("items") is None:
            data["items"] = []
        token = data.get("page_token") or None
        has_more = data.get("has_more") is True and token is not None
        data["page_token"] = token if has_more else None
        data["has_more"] = has_more
        return data


class ProgressEstimate(BaseModel):
    """Progress of one message pagination run.

    ``processed`` never decreases within a run. ``estimated_total`` is a
    heuristic and may move in either direction until the final page.
    """

    processed: int = Field(default=0, ge=0)
    estimated_total: int = Field(default=0, ge=0)
    has_more: bool = True

    model_config = ConfigDict(frozen=True)

    @property
    def percent(self) -> float:
        if self.estimated_total <= 0:
            return 0.0 if self.has_more else 100.0
        return min(100.0, self.processed * 100.0 / self.estimated_total)
