"""
download.py - Page Fetcher

Single HTTP GET per call with a bounded redirect policy and an identifying
User-Agent. Failures are raised as FetchError subclasses; retrying is left
to the crawl loop.
"""

import requests


class FetchError(Exception):
    """A page could not be fetched."""


class TransportError(FetchError):
    """DNS, connection, timeout or other network-level failure."""


class BadStatus(FetchError):
    """Final response status was not 2xx."""

    def __init__(self, status_code):
        super().__init__(f"bad status code: {status_code}")
        self.status_code = status_code


class TooManyRedirects(FetchError):
    """Redirect chain was longer than the configured bound."""


def build_session(config):
    """Session carrying the crawler's User-Agent and redirect cap."""
    session = requests.Session()
    session.headers["User-Agent"] = config.user_agent
    session.max_redirects = config.max_redirects
    return session


def download(url, config, logger, session=None):
    """
    Fetch url and return the raw response body.

    Args:
        url: Absolute URL to GET
        config: Config (user_agent, max_redirects, timeout)
        logger: Logger for redirect/debug messages
        session: Reused requests.Session; one is built when omitted

    Returns:
        Response body as bytes

    Raises:
        TooManyRedirects, BadStatus, TransportError
    """
    if session is None:
        session = build_session(config)

    try:
        resp = session.get(url, timeout=config.timeout or None,
                           allow_redirects=True)
    except requests.exceptions.TooManyRedirects as e:
        raise TooManyRedirects(
            f"stopped after {config.max_redirects} redirects") from e
    except requests.exceptions.RequestException as e:
        raise TransportError(str(e)) from e

    try:
        if resp.history:
            logger.debug(f"{url} redirected to {resp.url} "
                         f"({len(resp.history)} hops)")

        if not 200 <= resp.status_code < 300:
            raise BadStatus(resp.status_code)

        try:
            return resp.content
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e)) from e
    finally:
        resp.close()
