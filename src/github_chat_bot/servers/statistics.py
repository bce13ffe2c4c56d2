import asyncio
from collections import defaultdict
from collections.abc import Awaitable, Callable
from logging import Logger
from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.utilities.logging import get_logger

from github_chat_bot.clients.protocols import RepositoryStatisticsProvider
from github_chat_bot.models.metrics import MetricKind
from github_chat_bot.servers.shared.annotations import CHANNEL_ID

MetricKey = tuple[MetricKind, str]


class ChannelMetricStore:
    """The last value of each metric observed in each channel.

    Entries are created on the first successful fetch in a channel and live until `reset` is called."""

    _values: dict[MetricKey, int]
    _locks: defaultdict[MetricKey, asyncio.Lock]

    def __init__(self):
        self._values = {}
        self._locks = defaultdict(asyncio.Lock)

    def get(self, metric_kind: MetricKind, channel_id: str) -> int | None:
        return self._values.get((metric_kind, channel_id))

    def set(self, metric_kind: MetricKind, channel_id: str, value: int) -> None:
        self._values[(metric_kind, channel_id)] = value

    def lock(self, metric_kind: MetricKind, channel_id: str) -> asyncio.Lock:
        return self._locks[(metric_kind, channel_id)]

    def reset(self) -> None:
        """Forget every observed value. Locks are kept so calls in flight stay serialised with later ones."""
        self._values.clear()

    def __len__(self) -> int:
        return len(self._values)


def format_metric_message(metric_kind: MetricKind, value: int, previous_value: int | None) -> str:
    message: str = f"{metric_kind.label}: {value}"

    if previous_value is None or value == previous_value:
        return message

    return message + f" ({value - previous_value:+,} {metric_kind.unit} since the last call in this channel)"


def format_metric_error(metric_kind: MetricKind) -> str:
    return f"Could not fetch {metric_kind.unit} count from the GitHub API"


class StatisticsServer:
    statistics_provider: RepositoryStatisticsProvider
    store: ChannelMetricStore
    logger: Logger

    def __init__(
        self,
        statistics_provider: RepositoryStatisticsProvider,
        store: ChannelMetricStore | None = None,
        logger: Logger | None = None,
    ):
        self.statistics_provider = statistics_provider
        self.store = store or ChannelMetricStore()
        self.logger = logger or get_logger(name=__name__)

    def register_tools(self, fastmcp: FastMCP[Any]) -> FastMCP[Any]:
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_stars_message))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_forks_message))

        return fastmcp

    def _get_fetcher(self, metric_kind: MetricKind) -> Callable[[], Awaitable[int]]:
        fetchers: dict[MetricKind, Callable[[], Awaitable[int]]] = {
            MetricKind.STARS: self.statistics_provider.get_star_count,
            MetricKind.FORKS: self.statistics_provider.get_fork_count,
        }

        return fetchers[metric_kind]

    async def get_metric_message(self, metric_kind: MetricKind, channel_id: str) -> str:
        """Report the current value of a metric along with the change since it was last reported in the channel.

        Raises:
            ValueError: If the metric kind is unknown.
        """

        metric_kind = MetricKind(metric_kind)
        fetcher: Callable[[], Awaitable[int]] = self._get_fetcher(metric_kind)

        async with self.store.lock(metric_kind, channel_id):
            try:
                value: int = await fetcher()
            except Exception:
                self.logger.exception(f"Could not fetch {metric_kind.unit} count for channel {channel_id}")
                return format_metric_error(metric_kind)

            message: str = format_metric_message(metric_kind, value=value, previous_value=self.store.get(metric_kind, channel_id))

            self.store.set(metric_kind, channel_id, value)

        return message

    async def get_stars_message(self, channel_id: CHANNEL_ID) -> str:
        """Get the number of stars of the repository and how it changed since the last call in this channel."""
        return await self.get_metric_message(MetricKind.STARS, channel_id)

    async def get_forks_message(self, channel_id: CHANNEL_ID) -> str:
        """Get the number of forks of the repository and how it changed since the last call in this channel."""
        return await self.get_metric_message(MetricKind.FORKS, channel_id)
