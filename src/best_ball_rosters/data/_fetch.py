import logging
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def default_client(timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.Client:
    return httpx.Client(timeout=httpx.Timeout(timeout_seconds, connect=10.0), follow_redirects=True)


def read_text(location: str, client: httpx.Client) -> str:
    """Read a dataset from a local path or an http(s) URL.

    Raises:
        httpx.HTTPError: If the URL cannot be fetched or returns an error status.
        OSError: If the local file cannot be read.
    """
    if is_url(location):
        logger.debug("GET %s", location)
        response = client.get(location)
        response.raise_for_status()
        return response.text
    path = Path(location).expanduser()
    logger.debug("Reading %s", path)
    return path.read_text(encoding="utf-8")
