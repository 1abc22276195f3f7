"""Canonical query options."""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]


class QueryOptions(BaseModel):
    """Normalized, validated options for one get() call."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    query_type: str = Field(..., alias="queryType")
    query_selector: str = Field(..., alias="querySelector")
    query: str
    id: Number = 0
    page: Optional[Number] = None
    per_page: Optional[Number] = Field(default=None, alias="perPage")

    @field_validator("id", "page", "per_page")
    @classmethod
    def _whole_floats_to_int(cls, value: Any) -> Any:
        # 5.0 and 5 must name the same query and render as "5" in URLs
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    def signature(self) -> str:
        """Cache key: id :: queryType :: querySelector :: query."""
        return f"{self.id}::{self.query_type}::{self.query_selector}::{self.query}"


class QueryResult(BaseModel):
    """Outcome of a single page request, for future-based callers."""

    ok: bool
    data: Optional[object] = None
    error: Optional[object] = None
