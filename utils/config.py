"""
config.py - Crawler Configuration

Turns the INI file (plus environment overrides) into one Config object that
is handed to every component. Nothing else reads the environment.
"""

import os


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 OPR/106.0.0.0"
)


class ConfigurationError(Exception):
    """Required setting missing or malformed; crawling must not start."""


class Config(object):
    """
    Crawl settings.

    Attributes:
        base_url: Scope prefix; only URLs starting with it are crawled
        found_file, scraped_file: Paths of the frontier / visited stores
        downloads_folder: Where page bodies are written as <index>.html
        threads_count: Workers per round
        user_agent: Identifying header sent with every request
        round_delay: Seconds to pause between rounds
        max_redirects: Redirects followed before a fetch fails
        timeout: Per-request timeout in seconds
        max_failures: Failed attempts before a URL is no longer dispatched
            (0 keeps retrying forever)
    """

    def __init__(self, config, environ=None):
        """
        Args:
            config: ConfigParser already loaded from the INI file
            environ: Mapping of overrides (the launcher passes os.environ)
        """
        environ = environ if environ is not None else {}
        local = _section(config, "LOCAL PROPERTIES")
        crawler = _section(config, "CRAWLER")
        ident = _section(config, "IDENTIFICATION")

        self.base_url = (
            environ.get("BASE_URL") or crawler.get("BASEURL", "")).strip()
        if not self.base_url:
            raise ConfigurationError(
                "BASE_URL is not set in the environment or config file")

        self.project_folder = (
            environ.get("PROJECT_FOLDERNAME")
            or local.get("PROJECTFOLDER", "project")).strip()
        self.found_file = os.path.join(
            self.project_folder,
            environ.get("FOUND_URLS_FILENAME")
            or local.get("FOUNDURLS", "found_urls.txt"))
        self.scraped_file = os.path.join(
            self.project_folder,
            environ.get("SCRAPED_URLS_FILENAME")
            or local.get("SCRAPEDURLS", "scraped_urls.txt"))
        self.downloads_folder = os.path.join(
            self.project_folder,
            environ.get("DOWNLOADED_FILES_FOLDERNAME")
            or local.get("DOWNLOADS", "downloads"))

        self.user_agent = ident.get("USERAGENT", DEFAULT_USER_AGENT).strip()
        self.threads_count = _number(local, "THREADCOUNT", 10, int)
        self.round_delay = _number(crawler, "ROUNDDELAY", 1.0, float)
        self.max_redirects = _number(crawler, "MAXREDIRECTS", 10, int)
        self.timeout = _number(crawler, "TIMEOUT", 30.0, float)
        self.max_failures = _number(crawler, "MAXFAILURES", 0, int)

        if self.threads_count < 1:
            raise ConfigurationError("THREADCOUNT must be at least 1")


def _section(config, name):
    return config[name] if config.has_section(name) else {}


def _number(section, key, default, cast):
    raw = section.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}")
