"""URL helpers for telling Atlassian Cloud apart from Server/Data Center."""

from urllib.parse import urlparse

CLOUD_HOST_SUFFIXES = (".atlassian.net", ".jira.com", ".jira-dev.com")


def is_atlassian_cloud_url(url: str | None) -> bool:
    """Whether ``url`` points at an Atlassian Cloud site.

    Anything else, including localhost and private addresses, is treated as
    a Server/Data Center deployment.
    """
    if not url:
        return False
    hostname = (urlparse(url).hostname or "").lower()
    return hostname.endswith(CLOUD_HOST_SUFFIXES)
