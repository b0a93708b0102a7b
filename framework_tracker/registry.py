"""Static registry of the frameworks tracked across both data sources."""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field


class TrackedFramework(BaseModel):
    """A project polled on Stack Overflow and GitHub."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name of the framework")
    stackoverflow_tag: str = Field(..., description="Tag used on Stack Overflow")
    github_repo: str = Field(..., description="Repository as owner/repo")


FRAMEWORKS: tuple[TrackedFramework, ...] = (
    TrackedFramework(
        name="Prometheus",
        stackoverflow_tag="prometheus",
        github_repo="prometheus/prometheus",
    ),
    TrackedFramework(
        name="Selenium", stackoverflow_tag="selenium", github_repo="SeleniumHQ/selenium"
    ),
    TrackedFramework(
        name="OpenAI", stackoverflow_tag="openai", github_repo="openai/openai-cookbook"
    ),
    TrackedFramework(
        name="Docker", stackoverflow_tag="docker", github_repo="docker/docker"
    ),
    TrackedFramework(
        name="Milvus", stackoverflow_tag="milvus", github_repo="milvus-io/milvus"
    ),
    TrackedFramework(name="Go", stackoverflow_tag="golang", github_repo="golang/go"),
)


def get_framework(
    name: str, frameworks: Sequence[TrackedFramework] = FRAMEWORKS
) -> TrackedFramework:
    """Look up a tracked framework by display name (case-insensitive).

    Raises:
        KeyError: If no framework with that name is tracked
    """
    wanted = name.strip().lower()
    for framework in frameworks:
        if framework.name.lower() == wanted:
            return framework
    raise KeyError(f"Unknown framework '{name}'")
