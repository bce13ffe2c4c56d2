from typing import TYPE_CHECKING, Literal, Self

from githubkit.utils import UNSET
from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from github_chat_bot.clients.protocols import SearchHit


def is_pull_request(search_hit: "SearchHit") -> bool:
    """Search hits only carry a `pull_request` marker when they are pull requests."""
    return search_hit.pull_request is not None and search_hit.pull_request is not UNSET


class SearchResultItem(BaseModel):
    """An issue or pull request found by a title search."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["PR", "Issue"] = Field(description="Whether the item is a pull request or an issue.")
    number: int = Field(description="The number of the issue or pull request.")
    title: str = Field(description="The title of the issue or pull request.")

    @classmethod
    def from_search_hit(cls, search_hit: "SearchHit") -> Self:
        return cls(kind="PR" if is_pull_request(search_hit) else "Issue", number=search_hit.number, title=search_hit.title)

    def to_choice(self) -> "AutocompleteChoice":
        return AutocompleteChoice(name=f"[{self.kind}] ({self.number}) {self.title}", value=str(self.number))


class AutocompleteChoice(BaseModel):
    """A single autocomplete suggestion. The value can be passed back as an issue or pull request number."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="The text shown to the user.")
    value: str = Field(description="The number of the issue or pull request.")
