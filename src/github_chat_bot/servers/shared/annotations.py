from typing import Annotated

from pydantic import Field

CHANNEL_ID_DESCRIPTION = "The identifier of the chat channel the request came from."
CHANNEL_ID = Annotated[str, Field(description=CHANNEL_ID_DESCRIPTION)]

MESSAGE_TEXT = Annotated[str, Field(description="The chat message to scan for issue and pull request references.")]

QUERY_FRAGMENT = Annotated[str, Field(description="The partial title typed by the user so far.")]

LINK_TEXT = Annotated[str | None, Field(description="Text that will be prepended before the link.")]
