from collections.abc import Awaitable, Callable, Sequence
from logging import Logger, getLogger
from typing import TYPE_CHECKING, Any, TypeVar

from githubkit import GitHub as GitHubKit
from githubkit.auth.token import TokenAuthStrategy
from githubkit.exception import GitHubException as GitHubKitGitHubException
from githubkit.exception import RequestFailed as GitHubKitRequestFailed
from githubkit.response import Response as GitHubKitResponse
from pydantic import BaseModel

from github_chat_bot.clients.errors.github import RequestError, ResourceNotFoundError
from github_chat_bot.clients.models.github import RepositoryStatistics
from github_chat_bot.utilities.settings import get_github_token, get_home_owner, get_home_repo

if TYPE_CHECKING:
    from githubkit.versions.v2022_11_28.models import FullRepository as GitHubKitFullRepository
    from githubkit.versions.v2022_11_28.models import Issue as GitHubKitIssue
    from githubkit.versions.v2022_11_28.models import IssueSearchResultItem as GitHubKitIssueSearchResultItem
    from githubkit.versions.v2022_11_28.models import SearchIssuesGetResponse200 as GitHubKitSearchIssuesGetResponse200

NOT_FOUND_ERROR = 404

GITHUBKIT_RESPONSE_TYPE = BaseModel | Sequence[BaseModel]

T = TypeVar("T", bound=GITHUBKIT_RESPONSE_TYPE)


def build_title_search_query(owner: str, repo: str, fragment: str) -> str:
    return f"repo:{owner}/{repo} in:title {fragment}"


def extract_response(response: GitHubKitResponse[T], /) -> T:
    """Extract the response from a response."""

    return response.parsed_data


def get_githubkit_client() -> GitHubKit[Any]:
    # Failures surface to the caller immediately, nothing is retried.
    if token := get_github_token():
        return GitHubKit[TokenAuthStrategy](auth=TokenAuthStrategy(token=token), auto_retry=False)

    return GitHubKit(auto_retry=False)


class GitHubChatClient:
    githubkit_client: GitHubKit[Any]
    logger: Logger

    owner: str
    repo: str

    log_requests: bool
    log_responses: bool
    log_on_error: bool

    def __init__(
        self,
        githubkit_client: GitHubKit[Any] | None = None,
        logger: Logger | None = None,
        owner: str | None = None,
        repo: str | None = None,
        log_requests: bool = True,
        log_responses: bool = False,
        log_on_error: bool = True,
    ):
        self.githubkit_client = githubkit_client or get_githubkit_client()
        self.logger = logger or getLogger(__name__)
        self.owner = owner or get_home_owner()
        self.repo = repo or get_home_repo()
        self.log_requests = log_requests
        self.log_responses = log_responses
        self.log_on_error = log_on_error

    def _get_loggers(self) -> tuple[Callable[[str], Any], Callable[[str], Any], Callable[[str], Any]]:
        request_logger = self.logger.info if self.log_requests else self.logger.debug
        response_logger = self.logger.info if self.log_responses else self.logger.debug
        error_logger = self.logger.exception if self.log_on_error else self.logger.debug
        return request_logger, response_logger, error_logger

    async def _perform_rest_request(
        self,
        action: str,
        *,
        method: Callable[..., Awaitable[GitHubKitResponse[T]]],
        **request_args: Any,  # pyright: ignore[reportAny]
    ) -> T:
        """Perform a request and extract the response.

        Args:
            action: The action being performed.
            method: The githubkit method to call with the request arguments.

        Raises:
            ResourceNotFoundError: If the resource is not found.
            RequestError: If the request fails.
        """

        request_logger, response_logger, error_logger = self._get_loggers()

        request_logger(f"Performing {action} using {method.__name__} with kwargs {request_args}")

        try:
            response: GitHubKitResponse[T] = await method(**request_args)
        except GitHubKitRequestFailed as e:
            if e.response.status_code == NOT_FOUND_ERROR:
                raise ResourceNotFoundError(action=action, resource=e.request.url.path) from e

            error_logger(f"RequestFailed error performing {action} using {method.__name__} with kwargs {request_args}: {e}")

            raise RequestError(action=action, message=str(e)) from e
        except GitHubKitGitHubException as e:
            error_logger(f"Error performing {action} using {method.__name__} with kwargs {request_args}: {e}")

            raise RequestError(action=action, message=str(e)) from e

        extracted_response = extract_response(response)

        response_logger(f"Extracted response for {action} using {method.__name__} with kwargs {request_args}: {extracted_response}")

        return extracted_response

    async def search_issues_and_pull_requests(self, query: str) -> list["GitHubKitIssueSearchResultItem"]:
        """Search issues and pull requests with a raw GitHub search query."""

        response: GitHubKitSearchIssuesGetResponse200 = await self._perform_rest_request(
            action="Search issues and pull requests",
            method=self.githubkit_client.rest.search.async_issues_and_pull_requests,
            q=query,
        )

        return list(response.items)

    async def get_issue_or_pull_request_url(self, owner: str, repo: str, number: int) -> str:
        """Get the web URL of an issue or pull request.

        The issues endpoint also serves pull requests, in which case the URL points at the pull request."""

        issue: GitHubKitIssue = await self._perform_rest_request(
            action="Get issue or pull request",
            method=self.githubkit_client.rest.issues.async_get,
            owner=owner,
            repo=repo,
            issue_number=number,
        )

        return issue.html_url

    async def get_repository_statistics(self, owner: str | None = None, repo: str | None = None) -> RepositoryStatistics:
        """Get the star and fork counts of a repository, the home repository by default."""

        full_repository: GitHubKitFullRepository = await self._perform_rest_request(
            action="Get repository",
            method=self.githubkit_client.rest.repos.async_get,
            owner=owner or self.owner,
            repo=repo or self.repo,
        )

        return RepositoryStatistics.from_full_repository(full_repository=full_repository)

    async def get_star_count(self) -> int:
        return (await self.get_repository_statistics()).stars

    async def get_fork_count(self) -> int:
        return (await self.get_repository_statistics()).forks
