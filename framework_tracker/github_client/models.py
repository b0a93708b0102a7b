"""Pydantic models for GitHub data structures.

API Reference: https://docs.github.com/en/rest/issues/issues
"""

from pydantic import BaseModel, ConfigDict, Field


class GitHubIssue(BaseModel):
    """GitHub issue as returned by the repository issues endpoint.

    Only the fields that are persisted are kept; everything else in the
    payload is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Globally unique issue identifier (integer)")
    title: str = Field(..., description="Short description/title of the issue")
    body: str | None = Field(
        None, description="Detailed description of the issue in markdown"
    )
    framework: str | None = Field(
        None, description="Tracked framework whose repository returned the issue"
    )
