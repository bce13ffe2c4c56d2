ExtraInfoType = dict[str, str | None]


class ServerError(Exception):
    """A request error from the GitHub chat bot server."""

    def __init__(self, message: str, extra_info: ExtraInfoType | None = None):
        msg = message
        if extra_info:
            msg += " (" + ", ".join([f"{key}: {value}" for key, value in extra_info.items() if value is not None]) + ")"
        super().__init__(msg)


class UnknownCatalogEntryError(ServerError):
    """The requested link or canned message does not exist."""

    def __init__(self, catalog: str, name: str, choices: list[str]):
        super().__init__(message=f"Unknown {catalog} entry.", extra_info={"name": name, "choices": ", ".join(choices)})
