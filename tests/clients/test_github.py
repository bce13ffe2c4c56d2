from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from dirty_equals import IsStr
from githubkit.exception import GitHubException as GitHubKitGitHubException
from githubkit.exception import RequestFailed as GitHubKitRequestFailed
from inline_snapshot import snapshot

from github_chat_bot.clients.errors.github import RequestError, ResourceNotFoundError
from github_chat_bot.clients.github import GitHubChatClient, build_title_search_query
from github_chat_bot.clients.models.github import RepositoryStatistics
from tests.conftest import FakeSearchHit, mock_githubkit_method


def full_repository(stars: int, forks: int) -> SimpleNamespace:
    return SimpleNamespace(owner=SimpleNamespace(login="immich-app"), name="immich", stargazers_count=stars, forks_count=forks)


def request_failed(status_code: int, path: str) -> GitHubKitRequestFailed:
    response = MagicMock(status_code=status_code)
    response.raw_request.url.path = path
    return GitHubKitRequestFailed(response)


def test_init():
    github_chat_client = GitHubChatClient(owner="octokit", repo="rest.js")
    assert github_chat_client.owner == "octokit"
    assert github_chat_client.repo == "rest.js"


def test_build_title_search_query():
    assert build_title_search_query(owner="immich-app", repo="immich", fragment="first") == "repo:immich-app/immich in:title first"


class TestRepositories:
    async def test_get_repository_statistics(self, github_chat_client: GitHubChatClient, githubkit_client_mock: MagicMock):
        githubkit_client_mock.rest.repos.async_get = mock_githubkit_method("async_get", parsed_data=full_repository(stars=42, forks=7))

        repository_statistics: RepositoryStatistics = await github_chat_client.get_repository_statistics()

        assert repository_statistics.model_dump() == snapshot({"owner": "immich-app", "repo": "immich", "stars": 42, "forks": 7})
        githubkit_client_mock.rest.repos.async_get.assert_awaited_once_with(owner="immich-app", repo="immich")

    async def test_get_star_and_fork_count(self, github_chat_client: GitHubChatClient, githubkit_client_mock: MagicMock):
        githubkit_client_mock.rest.repos.async_get = mock_githubkit_method("async_get", parsed_data=full_repository(stars=42, forks=7))

        assert await github_chat_client.get_star_count() == 42
        assert await github_chat_client.get_fork_count() == 7

    async def test_get_repository_statistics_error(self, github_chat_client: GitHubChatClient, githubkit_client_mock: MagicMock):
        githubkit_client_mock.rest.repos.async_get = mock_githubkit_method("async_get", side_effect=GitHubKitGitHubException("boom"))

        with pytest.raises(RequestError) as e:
            _ = await github_chat_client.get_star_count()

        assert str(e.value) == snapshot("A request error occured. (action: Get repository, message: boom)")

    async def test_missing_repository_raises(self, githubkit_client_mock: MagicMock):
        githubkit_client_mock.rest.repos.async_get = mock_githubkit_method(
            "async_get", side_effect=request_failed(status_code=404, path="/repos/immich-app/missing")
        )
        github_chat_client = GitHubChatClient(githubkit_client=githubkit_client_mock, repo="missing")

        with pytest.raises(ResourceNotFoundError):
            _ = await github_chat_client.get_repository_statistics()


class TestIssuesOrPullRequests:
    async def test_get_issue_or_pull_request_url(self, github_chat_client: GitHubChatClient, githubkit_client_mock: MagicMock):
        githubkit_client_mock.rest.issues.async_get = mock_githubkit_method(
            "async_get", parsed_data=SimpleNamespace(html_url="https://github.com/octokit/rest.js/pull/4242")
        )

        url: str = await github_chat_client.get_issue_or_pull_request_url(owner="octokit", repo="rest.js", number=4242)

        assert url == "https://github.com/octokit/rest.js/pull/4242"
        githubkit_client_mock.rest.issues.async_get.assert_awaited_once_with(owner="octokit", repo="rest.js", issue_number=4242)

    async def test_get_missing_issue_or_pull_request(self, github_chat_client: GitHubChatClient, githubkit_client_mock: MagicMock):
        githubkit_client_mock.rest.issues.async_get = mock_githubkit_method(
            "async_get", side_effect=request_failed(status_code=404, path="/repos/octokit/rest.js/issues/100000")
        )

        with pytest.raises(ResourceNotFoundError) as e:
            _ = await github_chat_client.get_issue_or_pull_request_url(owner="octokit", repo="rest.js", number=100000)

        assert str(e.value) == IsStr(regex=r".*resource: /repos/octokit/rest\.js/issues/100000.*")


class TestSearch:
    async def test_search_issues_and_pull_requests(self, github_chat_client: GitHubChatClient, githubkit_client_mock: MagicMock):
        search_hits = [FakeSearchHit(number=123, title="my-first-pr", pull_request={"url": "something"})]
        githubkit_client_mock.rest.search.async_issues_and_pull_requests = mock_githubkit_method(
            "async_issues_and_pull_requests", parsed_data=SimpleNamespace(items=search_hits)
        )

        assert await github_chat_client.search_issues_and_pull_requests(query="repo:immich-app/immich in:title first") == search_hits
        githubkit_client_mock.rest.search.async_issues_and_pull_requests.assert_awaited_once_with(q="repo:immich-app/immich in:title first")

    async def test_search_error(self, github_chat_client: GitHubChatClient, githubkit_client_mock: MagicMock):
        githubkit_client_mock.rest.search.async_issues_and_pull_requests = mock_githubkit_method(
            "async_issues_and_pull_requests", side_effect=request_failed(status_code=422, path="/search/issues")
        )

        with pytest.raises(RequestError):
            _ = await github_chat_client.search_issues_and_pull_requests(query="repo:immich-app/immich in:title first")


class TestLogging:
    async def test_logs_requests_but_not_responses_by_default(self, githubkit_client_mock: MagicMock):
        logger = MagicMock()
        githubkit_client_mock.rest.repos.async_get = mock_githubkit_method("async_get", parsed_data=full_repository(stars=42, forks=7))
        github_chat_client = GitHubChatClient(githubkit_client=githubkit_client_mock, logger=logger)

        _ = await github_chat_client.get_star_count()

        assert logger.info.call_count == 1
        assert logger.info.call_args.args[0] == IsStr(regex=r"Performing Get repository using async_get .*")
        assert logger.debug.call_args.args[0] == IsStr(regex=r"Extracted response for Get repository .*")

    async def test_quiet_client_logs_everything_at_debug(self, githubkit_client_mock: MagicMock):
        logger = MagicMock()
        githubkit_client_mock.rest.repos.async_get = mock_githubkit_method("async_get", side_effect=GitHubKitGitHubException("boom"))
        github_chat_client = GitHubChatClient(
            githubkit_client=githubkit_client_mock, logger=logger, log_requests=False, log_on_error=False
        )

        with pytest.raises(RequestError):
            _ = await github_chat_client.get_star_count()

        logger.info.assert_not_called()
        logger.exception.assert_not_called()
        assert logger.debug.call_count == 2

    async def test_logs_failures_with_traceback(self, githubkit_client_mock: MagicMock):
        logger = MagicMock()
        githubkit_client_mock.rest.repos.async_get = mock_githubkit_method(
            "async_get", side_effect=request_failed(status_code=500, path="/repos/immich-app/immich")
        )
        github_chat_client = GitHubChatClient(githubkit_client=githubkit_client_mock, logger=logger, log_responses=True)

        with pytest.raises(RequestError):
            _ = await github_chat_client.get_star_count()

        logger.exception.assert_called_once()
        assert logger.exception.call_args.args[0] == IsStr(regex=r"RequestFailed error performing Get repository .*")
