"""
Test configuration and fixtures for crawler tests
"""

from configparser import ConfigParser
from threading import Lock

import pytest

import utils
from utils.config import Config
from utils.download import BadStatus


BASE_URL = "https://x.com/"


@pytest.fixture(scope="session", autouse=True)
def log_dir(tmp_path_factory):
    """Keep Logs/ out of the working directory"""
    utils.LOG_DIR = str(tmp_path_factory.mktemp("Logs"))


@pytest.fixture
def make_config(tmp_path):
    """Build a Config rooted in a temporary project folder"""

    def _make(base_url=BASE_URL, **crawler_settings):
        cparser = ConfigParser()
        cparser.read_dict({
            "LOCAL PROPERTIES": {
                "PROJECTFOLDER": str(tmp_path / "project"),
                "THREADCOUNT": crawler_settings.pop("THREADCOUNT", "4"),
            },
            "CRAWLER": {
                "BASEURL": base_url,
                "ROUNDDELAY": "0",
                **crawler_settings,
            },
        })
        return Config(cparser)

    return _make


@pytest.fixture
def config(make_config):
    return make_config()


class FakeSite:
    """
    Stand-in for utils.download.download.

    pages maps url -> html string, or -> int status to fail with BadStatus.
    Unknown urls fail with 404.
    """

    def __init__(self):
        self.pages = {}
        self.fetched = []
        self.lock = Lock()

    def download(self, url, config, logger, session=None):
        with self.lock:
            self.fetched.append(url)
        page = self.pages.get(url, 404)
        if isinstance(page, int):
            raise BadStatus(page)
        return page.encode("utf-8")

    def count(self, url):
        with self.lock:
            return self.fetched.count(url)


@pytest.fixture
def fake_site(monkeypatch):
    site = FakeSite()
    monkeypatch.setattr("crawler.worker.download", site.download)
    return site
