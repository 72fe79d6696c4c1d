"""
worker.py - Crawler Worker Threads

Worker threads that take jobs off the round's queue, download each page,
save it under its frontier index, extract links using the scraper module,
and commit the results back to the frontier.

Key role: Executes the fetch-extract-commit step for one round
"""

from threading import Thread

from utils.download import download, build_session, FetchError
from utils import get_logger
from crawler.frontier import StoreError
import scraper


class Worker(Thread):
    """
    Worker thread that downloads and scrapes web pages.

    Runs until it pulls the None sentinel from the job queue. A failed job
    is logged and dropped for the rest of the round; the URL stays
    unscraped, so a later round dispatches it again.
    """

    def __init__(self, worker_id, config, frontier, jobs):
        """
        Initialize a worker thread.

        Args:
            worker_id: Unique identifier for logging
            config: Configuration object
            frontier: Shared frontier instance for URL management
            jobs: queue.Queue of Job items, terminated by None
        """
        self.worker_id = worker_id
        self.logger = get_logger(f"Worker-{worker_id}", "Worker")
        self.config = config
        self.frontier = frontier
        self.jobs = jobs
        self.session = build_session(config)
        self.completed = 0
        self.failed = 0
        super().__init__(daemon=True)

    def run(self):
        try:
            while True:
                job = self.jobs.get()
                try:
                    if job is None:
                        break
                    self.process(job)
                finally:
                    self.jobs.task_done()
        finally:
            self.session.close()

    def process(self, job):
        """
        Download, save and scrape one job, then commit it.

        Returns:
            True if the URL was marked scraped
        """
        self.logger.info(f"Scraping [{job.index}]: {job.url}")
        try:
            body = download(job.url, self.config, self.logger, self.session)
            self.frontier.save_artifact(job.index, body)
            links = scraper.scraper(job.url, body, self.config.base_url)
            self.frontier.mark_url_complete(job.url, links)
        except (FetchError, scraper.ParseError) as e:
            attempts = self.frontier.mark_url_failed(job.url)
            self.failed += 1
            self.logger.error(
                f"Error scraping {job.url} (attempt {attempts}): {e}")
            return False
        except StoreError:
            self.frontier.mark_url_failed(job.url)
            self.failed += 1
            self.logger.exception(f"Could not record results for {job.url}")
            return False

        self.completed += 1
        self.logger.info(
            f"Downloaded {job.url}, {len(body)} bytes, "
            f"{len(links)} in-scope links.")
        return True
