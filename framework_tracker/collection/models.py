"""Result models for fetch phases and whole collection cycles."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class FrameworkSkip(BaseModel):
    """A framework whose fetch failed and was left out of this run."""

    framework: str = Field(..., description="Display name of the framework")
    source: str = Field(..., description="'stackoverflow' or 'github'")
    kind: str = Field(..., description="'transient' or 'permanent'")
    reason: str = Field(..., description="Error message")


class FetchResult(BaseModel, Generic[T]):
    """Items gathered from one source across all tracked frameworks."""

    items: list[T] = Field(default_factory=list)
    skipped: list[FrameworkSkip] = Field(default_factory=list)
    calls: int = Field(0, description="Number of requests attempted")


class CycleReport(BaseModel):
    """Summary of one fetch-and-store run."""

    posts_fetched: int = 0
    posts_stored: int = 0
    issues_fetched: int = 0
    issues_created: int = 0
    issues_updated: int = 0
    skipped: list[FrameworkSkip] = Field(default_factory=list)

    @property
    def issues_stored(self) -> int:
        return self.issues_created + self.issues_updated

    @property
    def succeeded(self) -> bool:
        """True when no framework was skipped."""
        return not self.skipped
