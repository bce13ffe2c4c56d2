"""The narrow capabilities the servers depend on.

`GitHubChatClient` implements all of them; tests substitute fakes.
"""

from collections.abc import Sequence
from typing import Any, Protocol


class SearchHit(Protocol):
    """A single issue or pull request returned by a search.

    `pull_request` is only present when the hit is a pull request.
    """

    @property
    def number(self) -> int: ...

    @property
    def title(self) -> str: ...

    @property
    def pull_request(self) -> Any: ...


class IssueSearcher(Protocol):
    async def search_issues_and_pull_requests(self, query: str) -> Sequence[SearchHit]: ...


class IssueLocator(Protocol):
    async def get_issue_or_pull_request_url(self, owner: str, repo: str, number: int) -> str: ...


class RepositoryStatisticsProvider(Protocol):
    async def get_star_count(self) -> int: ...

    async def get_fork_count(self) -> int: ...
