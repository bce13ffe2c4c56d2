from unittest.mock import AsyncMock

import pytest

from github_chat_bot.servers.references import ReferenceServer
from github_chat_bot.servers.statistics import StatisticsServer
from tests.conftest import HOME_OWNER, HOME_REPO


@pytest.fixture
def reference_server(github_client_mock: AsyncMock) -> ReferenceServer:
    return ReferenceServer(
        issue_locator=github_client_mock,
        issue_searcher=github_client_mock,
        home_owner=HOME_OWNER,
        home_repo=HOME_REPO,
        minimum_reference_number=1000,
    )


@pytest.fixture
def statistics_server(github_client_mock: AsyncMock) -> StatisticsServer:
    return StatisticsServer(statistics_provider=github_client_mock)
