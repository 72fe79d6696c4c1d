import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.builder import ParserRejectedMarkup

warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)


class ParseError(Exception):
    """The fetched document could not be parsed as HTML."""


def scraper(url, body, base_url):
    """Extract in-scope links from a fetched page body (one pass)."""
    try:
        html = body.decode("utf-8", errors="replace")
    except AttributeError:
        html = body
    try:
        links = extract_next_links(html, base_url)
    except ParserRejectedMarkup as e:
        raise ParseError(f"could not parse {url}: {e}") from e
    return links


def extract_next_links(html, base_url):
    """
    Links from every <a href> in document order, kept only when in scope.

    Path-absolute hrefs ("/a/b") are joined onto base_url with a single
    slash. Relative hrefs ("page.html") are not resolved and so fall out of
    scope. Duplicates are returned as found; the frontier store drops them.
    """
    if not html:
        return list()

    soup = BeautifulSoup(html, "lxml")

    links = []
    for tag in soup.find_all("a", href=True):
        href = tag["href"]
        if isinstance(href, list):
            href = href[0] if href else ""
        href = href.strip()
        # "//host/path" is protocol-relative, not path-absolute
        if href.startswith("/") and not href.startswith("//"):
            href = base_url.rstrip("/") + href
        if is_valid(href, base_url):
            links.append(href)

    return links


def is_valid(url, base_url):
    if not url or "\n" in url or "\r" in url:
        return False
    return url.startswith(base_url)
