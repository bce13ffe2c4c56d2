from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from pydantic import Field

from github_chat_bot.servers.shared.annotations import LINK_TEXT
from github_chat_bot.servers.shared.errors import UnknownCatalogEntryError
from github_chat_bot.utilities.settings import get_docs_domain, get_home_owner, get_home_repo

LINK_NAME = Annotated[str, Field(description="Which docs page is needed, i.e. `reverse proxy`, `backup` or `github`.")]
MESSAGE_NAME = Annotated[str, Field(description="Which canned message is needed, i.e. `help ticket` or `feature request`.")]

HELP_TICKET_CHANNEL_ID = "1049703391762321418"


def build_links(docs_domain: str, owner: str, repo: str) -> dict[str, str]:
    return {
        "reverse proxy": f"{docs_domain}/administration/reverse-proxy",
        "database": f"{docs_domain}/guides/database-queries",
        "upgrade": f"{docs_domain}/install/docker-compose#step-4---upgrading",
        "libraries": f"{docs_domain}/features/libraries",
        "sidecar": f"{docs_domain}/features/xmp-sidecars",
        "docker": f"{docs_domain}/guides/docker-help",
        "backup": f"{docs_domain}/administration/backup-and-restore",
        "github": f"https://github.com/{owner}/{repo}",
        "cli": f"{docs_domain}/features/bulk-upload",
    }


def build_messages(docs_domain: str, owner: str, repo: str) -> dict[str, str]:
    return {
        "help ticket": (
            f"Please open a <#{HELP_TICKET_CHANNEL_ID}> ticket with more information and we can help you troubleshoot the issue."
        ),
        "reverse proxy": (
            "This sounds like it could be a reverse proxy issue. "
            f"Here's a link to the relevant documentation page: {docs_domain}/administration/reverse-proxy."
        ),
        "feature request": (
            f"For ideas or features you'd like {repo.capitalize()} to have, "
            "feel free to [open a feature request in the Github discussions]"
            f"(https://github.com/{owner}/{repo}/discussions/new?category=feature-request). "
            "However, please make sure to search for similar requests first to avoid duplicates."
        ),
    }


class LinkServer:
    links: dict[str, str]
    messages: dict[str, str]

    def __init__(self, docs_domain: str | None = None, owner: str | None = None, repo: str | None = None):
        docs_domain = docs_domain or get_docs_domain()
        owner = owner or get_home_owner()
        repo = repo or get_home_repo()

        self.links = build_links(docs_domain=docs_domain, owner=owner, repo=repo)
        self.messages = build_messages(docs_domain=docs_domain, owner=owner, repo=repo)

    def register_tools(self, fastmcp: FastMCP[Any]) -> FastMCP[Any]:
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.link))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.message))

        return fastmcp

    def link(self, name: LINK_NAME, text: LINK_TEXT = None) -> str:
        """Link to a documentation page, optionally prefixed with some text."""

        if name not in self.links:
            raise UnknownCatalogEntryError(catalog="link", name=name, choices=list(self.links))

        url: str = self.links[name]

        return f"{text}: {url}" if text else url

    def message(self, name: MESSAGE_NAME) -> str:
        """Get a canned reply for a reoccurring question."""

        if name not in self.messages:
            raise UnknownCatalogEntryError(catalog="message", name=name, choices=list(self.messages))

        return self.messages[name]
