"""
frontier.py - Persistent URL Frontier

Keeps the crawl state in two append-only, line-oriented files:
- the found store: every in-scope URL ever discovered, in discovery order
- the scraped store: every URL whose download and link extraction finished

A URL's position in the found store doubles as the name of its downloaded
page (<index>.html), so entries are never reordered or removed.

Key role: Owns both stores and the single lock that serializes every write,
and works out which URLs a round still has to dispatch.
"""

import os
from collections import Counter, namedtuple
from threading import RLock

from utils import get_logger


Job = namedtuple("Job", ["url", "index"])


class StoreError(Exception):
    """Reading or writing persisted crawl state failed."""


class UrlStore(object):
    """
    Ordered, deduplicated list of URLs backed by a text file.

    The file holds one URL per line and is the only durable state; the
    in-memory copy is rebuilt from it on open. append() is a read-then-write
    and must be called under the owner's lock when threads can race.
    """

    def __init__(self, path):
        self.path = path
        self._entries = []
        self._seen = set()

        try:
            if not os.path.exists(path):
                with open(path, "w", encoding="utf-8"):
                    pass
            with open(path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line:
                        self._entries.append(line)
                        self._seen.add(line)
        except OSError as e:
            raise StoreError(f"Could not open {path}: {e}") from e

    def __len__(self):
        return len(self._entries)

    def contains(self, url):
        return url in self._seen

    def append(self, url):
        """
        Add url as the last entry unless it is already stored.

        Returns:
            True if a line was written, False if url was already present

        Raises:
            ValueError: url is empty or spans several lines
            StoreError: the file could not be written
        """
        if not url or "\n" in url or "\r" in url:
            raise ValueError(f"Not a storable url: {url!r}")
        if url in self._seen:
            return False

        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(url + "\n")
                f.flush()
        except OSError as e:
            raise StoreError(f"Could not append to {self.path}: {e}") from e

        self._entries.append(url)
        self._seen.add(url)
        return True

    def read_all(self):
        return list(self._entries)


def get_start_index(found, scraped):
    """
    Index in found right after the most recently scraped URL.

    Returns 0 when nothing has been scraped, and len(found) when the last
    scraped URL is the final found entry or is not in found at all.
    """
    if not scraped:
        return 0
    last = scraped[-1]
    for i, url in enumerate(found):
        if url == last and i + 1 < len(found):
            return i + 1
    return len(found)


class Frontier(object):
    """
    Thread-safe owner of the found/scraped stores and downloaded pages.

    Workers only reach the stores through mark_url_complete() and
    mark_url_failed(), which both run under one lock. Round-boundary reads
    (status, get_tbd_jobs) are not locked; the crawler only calls them while
    no worker is running.
    """

    def __init__(self, config, restart):
        """
        Initialize the frontier.

        Args:
            config: Configuration object with base_url and store paths
            restart: If True, drop both store files and start from the seed
        """
        self.logger = get_logger("FRONTIER")
        self.config = config

        # Protects both stores and the failure counts
        self.lock = RLock()

        # url -> failed attempts since this process started
        self.failures = Counter()

        if restart:
            for path in (config.found_file, config.scraped_file):
                if os.path.exists(path):
                    self.logger.info(f"Found save file {path}, deleting it.")
                    os.remove(path)

        try:
            os.makedirs(config.project_folder or ".", exist_ok=True)
            os.makedirs(config.downloads_folder, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Could not create crawl folders: {e}") from e

        self.found = UrlStore(config.found_file)
        self.scraped = UrlStore(config.scraped_file)

        if not len(self.found):
            self.logger.info(
                f"Did not find saved urls in {config.found_file}, "
                f"starting from seed.")
        self.add_url(config.base_url)

        total, scraped = self.status()
        self.logger.info(
            f"Found {total - scraped} urls to be downloaded from {total} "
            f"total urls discovered.")

    def add_url(self, url):
        """Add url to the found store if it is new (thread-safe)."""
        with self.lock:
            return self.found.append(url)

    def status(self):
        """(total found, total scraped) lengths."""
        return len(self.found), len(self.scraped)

    def get_tbd_jobs(self):
        """
        Snapshot of the jobs the next round should dispatch.

        Starts at get_start_index(), pulled back to the first found URL that
        was never scraped, since workers finish out of order and a failed URL
        can sit before the last scraped one. Already scraped URLs and URLs
        that used up max_failures are skipped.

        Returns:
            List of Job(url, index) in found-store order
        """
        found = self.found.read_all()
        scraped = self.scraped.read_all()
        visited = set(scraped)

        start = get_start_index(found, scraped)
        first_unvisited = next(
            (i for i, url in enumerate(found) if url not in visited),
            len(found))
        start = min(start, first_unvisited)

        return [
            Job(url, index)
            for index, url in enumerate(found[start:], start)
            if url not in visited and not self.gave_up(url)
        ]

    def gave_up(self, url):
        """True once url has failed max_failures times (0 never gives up)."""
        max_failures = self.config.max_failures
        return bool(max_failures) and self.failures[url] >= max_failures

    def given_up_count(self):
        with self.lock:
            return sum(1 for url in self.failures if self.gave_up(url))

    def mark_url_complete(self, url, links):
        """
        Record discovered links and then url itself as one unit (thread-safe).

        Args:
            url: URL whose page was downloaded and parsed
            links: In-scope links found on that page (duplicates allowed)
        """
        with self.lock:
            if not self.found.contains(url):
                self.logger.error(
                    f"Completed url {url}, but have not seen it before.")

            for link in links:
                self.found.append(link)
            self.scraped.append(url)
            self.failures.pop(url, None)

    def mark_url_failed(self, url):
        """Count a failed attempt; url stays unscraped (thread-safe)."""
        with self.lock:
            self.failures[url] += 1
            return self.failures[url]

    def save_artifact(self, index, body):
        """Write a page body as <index>.html in the downloads folder."""
        path = os.path.join(self.config.downloads_folder, f"{index}.html")
        try:
            with open(path, "wb") as f:
                f.write(body)
        except OSError as e:
            raise StoreError(f"Could not save {path}: {e}") from e
        return path
