class RequestError(Exception):
    """A request to the GitHub API failed."""

    action: str
    resource: str | None

    def __init__(self, action: str, message: str | None = None, resource: str | None = None):
        self.action = action
        self.resource = resource

        details: dict[str, str | None] = {"action": action, "message": message, "resource": resource}
        super().__init__("A request error occured. (" + ", ".join(f"{key}: {value}" for key, value in details.items() if value) + ")")


class ResourceNotFoundError(RequestError):
    """The GitHub API returned a 404 for the requested resource."""

    def __init__(self, action: str, resource: str | None = None):
        super().__init__(action=action, message="The resource could not be found.", resource=resource)
