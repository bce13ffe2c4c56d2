import os

DEFAULT_HOME_OWNER = "immich-app"
DEFAULT_HOME_REPO = "immich"
DEFAULT_MINIMUM_REFERENCE_NUMBER = 1000
DEFAULT_DOCS_DOMAIN = "https://docs.immich.app/docs"


def get_home_owner() -> str:
    return os.getenv("HOME_OWNER") or DEFAULT_HOME_OWNER


def get_home_repo() -> str:
    return os.getenv("HOME_REPO") or DEFAULT_HOME_REPO


def get_minimum_reference_number() -> int:
    """Unqualified references below this number are ignored, i.e. `#123` in casual chat."""
    return int(os.getenv("MINIMUM_REFERENCE_NUMBER") or DEFAULT_MINIMUM_REFERENCE_NUMBER)


def get_docs_domain() -> str:
    return (os.getenv("DOCS_DOMAIN") or DEFAULT_DOCS_DOMAIN).rstrip("/")


def get_github_token() -> str | None:
    env_vars: tuple[str, ...] = ("GITHUB_TOKEN", "GITHUB_PERSONAL_ACCESS_TOKEN")
    for env_var in env_vars:
        if token := os.getenv(env_var):
            return token
    return None
