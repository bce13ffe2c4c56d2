from re import Match
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class Reference(BaseModel):
    """A shorthand mention of an issue or pull request, i.e. `#1234`, `repo#1234` or `owner/repo#1234`."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(description="The owner of the repository.")
    repo: str = Field(description="The name of the repository.")
    number: int = Field(description="The number of the issue or pull request.", gt=0)
    qualified: bool = Field(default=False, description="Whether the mention named a repository.")

    @classmethod
    def from_match(cls, match: Match[str], home_owner: str, home_repo: str) -> Self:
        repo: str | None = match.group("repo")

        return cls(
            owner=match.group("owner") or home_owner,
            repo=repo or home_repo,
            number=int(match.group("number")),
            qualified=repo is not None,
        )

    def to_shorthand(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"
