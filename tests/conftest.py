from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import BaseModel

from github_chat_bot.clients.github import GitHubChatClient

HOME_OWNER = "immich-app"
HOME_REPO = "immich"


class FakeSearchHit(BaseModel):
    number: int
    title: str
    pull_request: dict[str, Any] | None = None


def fake_issue_or_pull_request_url(owner: str, repo: str, number: int) -> str:
    return f"https://github.com/{owner}/{repo}/pull/{number}"


def mock_githubkit_method(name: str, parsed_data: Any = None, side_effect: Any = None) -> AsyncMock:
    """An async githubkit endpoint method returning a response that carries `parsed_data`."""

    method = AsyncMock(return_value=MagicMock(parsed_data=parsed_data), side_effect=side_effect)
    method.__name__ = name
    return method


@pytest.fixture
def github_client_mock() -> AsyncMock:
    github_client_mock = AsyncMock(spec=GitHubChatClient)
    github_client_mock.get_issue_or_pull_request_url.side_effect = fake_issue_or_pull_request_url
    return github_client_mock


@pytest.fixture
def githubkit_client_mock() -> MagicMock:
    return MagicMock()


@pytest.fixture
def github_chat_client(githubkit_client_mock: MagicMock) -> GitHubChatClient:
    return GitHubChatClient(githubkit_client=githubkit_client_mock, owner=HOME_OWNER, repo=HOME_REPO)
