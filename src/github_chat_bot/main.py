"""The entrypoint for the GitHub Chat Bot MCP Server."""

from logging import Logger
from typing import Literal

import click
from fastmcp import FastMCP
from fastmcp.server.middleware.logging import LoggingMiddleware
from fastmcp.utilities.logging import configure_logging, get_logger

from github_chat_bot.clients.github import GitHubChatClient
from github_chat_bot.servers.links import LinkServer
from github_chat_bot.servers.references import ReferenceServer
from github_chat_bot.servers.statistics import StatisticsServer

logger: Logger = get_logger(name=__name__)

configure_logging()


def new_mcp_server(github_client: GitHubChatClient | None = None) -> FastMCP[None]:
    github_client = github_client or GitHubChatClient()

    mcp: FastMCP[None] = FastMCP[None](
        name="GitHub Chat Bot",
        middleware=[LoggingMiddleware(include_payloads=True, logger=logger)],
    )

    reference_server: ReferenceServer = ReferenceServer(
        issue_locator=github_client,
        issue_searcher=github_client,
        logger=logger,
        home_owner=github_client.owner,
        home_repo=github_client.repo,
    )
    _ = reference_server.register_tools(fastmcp=mcp)

    statistics_server: StatisticsServer = StatisticsServer(statistics_provider=github_client, logger=logger)
    _ = statistics_server.register_tools(fastmcp=mcp)

    link_server: LinkServer = LinkServer(owner=github_client.owner, repo=github_client.repo)
    _ = link_server.register_tools(fastmcp=mcp)

    return mcp


mcp: FastMCP[None] = new_mcp_server()


@click.command()
@click.option(
    "--mcp-transport", type=click.Choice(["stdio", "streamable-http"]), default="stdio", help="The transport to run the MCP server on"
)
def run_mcp(mcp_transport: Literal["stdio", "streamable-http"]):
    mcp.run(transport=mcp_transport)


if __name__ == "__main__":
    run_mcp()
