import asyncio
from collections.abc import Sequence
from logging import Logger
from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.utilities.logging import get_logger

from github_chat_bot.clients.github import build_title_search_query
from github_chat_bot.clients.protocols import IssueLocator, IssueSearcher, SearchHit
from github_chat_bot.models.references import Reference
from github_chat_bot.models.search import AutocompleteChoice, SearchResultItem
from github_chat_bot.servers.shared.annotations import MESSAGE_TEXT, QUERY_FRAGMENT
from github_chat_bot.utilities.extract import extract_references_from_text, filter_low_numbered_references
from github_chat_bot.utilities.settings import get_home_owner, get_home_repo, get_minimum_reference_number


class ReferenceServer:
    issue_locator: IssueLocator
    issue_searcher: IssueSearcher
    logger: Logger

    home_owner: str
    home_repo: str
    minimum_reference_number: int

    def __init__(
        self,
        issue_locator: IssueLocator,
        issue_searcher: IssueSearcher,
        logger: Logger | None = None,
        home_owner: str | None = None,
        home_repo: str | None = None,
        minimum_reference_number: int | None = None,
    ):
        self.issue_locator = issue_locator
        self.issue_searcher = issue_searcher
        self.logger = logger or get_logger(name=__name__)
        self.home_owner = home_owner or get_home_owner()
        self.home_repo = home_repo or get_home_repo()
        self.minimum_reference_number = minimum_reference_number if minimum_reference_number is not None else get_minimum_reference_number()

    def register_tools(self, fastmcp: FastMCP[Any]) -> FastMCP[Any]:
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.resolve_references))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.search_autocomplete))

        return fastmcp

    def extract_references(self, text: str) -> list[Reference]:
        """Extract the references worth resolving from a chat message, in order of appearance."""

        references: list[Reference] = extract_references_from_text(text, home_owner=self.home_owner, home_repo=self.home_repo)

        return filter_low_numbered_references(references, minimum_number=self.minimum_reference_number)

    async def resolve_references(self, text: MESSAGE_TEXT) -> list[str]:
        """Find the issue and pull request references in a chat message and resolve them to their URLs.

        References inside code blocks are ignored, as are references like `#123` below the minimum number unless
        they name a repository (`immich#123`). References that cannot be resolved are skipped."""

        references: list[Reference] = self.extract_references(text)

        if not references:
            return []

        results: list[str | BaseException] = await asyncio.gather(
            *[
                self.issue_locator.get_issue_or_pull_request_url(owner=reference.owner, repo=reference.repo, number=reference.number)
                for reference in references
            ],
            return_exceptions=True,
        )

        urls: list[str] = []

        for reference, result in zip(references, results, strict=True):
            if isinstance(result, BaseException):
                self.logger.warning(f"Could not resolve {reference.to_shorthand()}, skipping it: {result}")
                continue

            urls.append(result)

        return urls

    async def search_autocomplete(self, query_fragment: QUERY_FRAGMENT) -> list[AutocompleteChoice]:
        """Suggest issues and pull requests of the home repository whose title matches what the user typed."""

        if not query_fragment.strip():
            return []

        query: str = build_title_search_query(owner=self.home_owner, repo=self.home_repo, fragment=query_fragment)

        try:
            search_hits: Sequence[SearchHit] = await self.issue_searcher.search_issues_and_pull_requests(query=query)
        except Exception:
            self.logger.exception(f"Search failed for query {query!r}, returning no suggestions")
            return []

        return [SearchResultItem.from_search_hit(search_hit).to_choice() for search_hit in search_hits]
