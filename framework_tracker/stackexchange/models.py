"""Pydantic models for Stack Exchange search results.

API Reference: https://api.stackexchange.com/docs/advanced-search
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StackOverflowPost(BaseModel):
    """Question returned by the advanced search endpoint."""

    model_config = ConfigDict(extra="ignore")

    question_id: int = Field(..., description="Question identifier on the site")
    title: str = Field(..., description="Question title (HTML-escaped)")
    body: str = Field("", description="Question body as HTML (withbody filter)")
    answers: str = Field(
        "", description="Answers payload kept as serialized JSON, empty if absent"
    )
    framework: str | None = Field(
        None, description="Tracked framework whose tag returned the question"
    )

    @field_validator("answers", mode="before")
    @classmethod
    def serialize_answers(cls, value: Any) -> str:
        """Store whatever the API sent for answers as an opaque JSON string."""
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return json.dumps(value, ensure_ascii=False)


class SearchResponse(BaseModel):
    """Common wrapper object around Stack Exchange results."""

    model_config = ConfigDict(extra="ignore")

    items: list[StackOverflowPost]
    has_more: bool = False
    quota_remaining: int | None = None
