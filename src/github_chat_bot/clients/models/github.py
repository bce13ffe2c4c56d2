from typing import Self

from githubkit.versions.v2022_11_28.models import (
    FullRepository as GitHubKitFullRepository,
)
from pydantic import BaseModel, ConfigDict, Field


class RepositoryStatistics(BaseModel):
    """The counters we report for a repository."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    owner: str = Field(description="The owner of the repository.")
    repo: str = Field(description="The name of the repository.")
    stars: int = Field(description="The number of stars the repository has.")
    forks: int = Field(description="The number of forks the repository has.")

    @classmethod
    def from_full_repository(cls, full_repository: GitHubKitFullRepository) -> Self:
        return cls(
            owner=full_repository.owner.login,
            repo=full_repository.name,
            stars=full_repository.stargazers_count,
            forks=full_repository.forks_count,
        )
