"""HTTP access to the stats endpoint."""

import logging

import requests

from serverstats.config import CONNECT_TIMEOUT
from serverstats.errors import TransportError

logger = logging.getLogger(__name__)


def fetch_stats(
    session: requests.Session,
    url: str,
    connect_timeout: float = CONNECT_TIMEOUT,
) -> str:
    """
    Fetch the raw stats document with a single GET request.

    Only the connect phase is bounded; a connected but slow server can hold
    the call for as long as it takes to answer.

    Args:
        session: Session to issue the request on.
        url: Full endpoint URL.
        connect_timeout: Connect timeout in seconds.

    Returns:
        The response body, or ``"{}"`` if the body is empty.

    Raises:
        TransportError: On network failure or a non-success HTTP status.
    """
    logger.debug("GET %s", url)
    try:
        response = session.get(url, timeout=(connect_timeout, None))
    except requests.RequestException as exc:
        raise TransportError(str(exc)) from exc

    with response:
        logger.debug("%s -> %d", url, response.status_code)
        if not response.ok:
            raise TransportError(f"Code: {response.status_code}", status_code=response.status_code)
        # JSON is UTF-8 unless the server says otherwise
        response.encoding = response.encoding or "utf-8"
        return response.text or "{}"
