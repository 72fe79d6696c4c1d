"""
crawler/__init__.py - Crawler Orchestrator

Coordinates the multi-threaded web crawler in rounds:
- Snapshotting the frontier to decide which URLs this round dispatches
- Spawning a fixed pool of worker threads to drain that snapshot
- Pausing, then starting the next round until nothing is left

Key role: High-level coordinator that ties together frontier and workers
"""

import time
from queue import Queue

from utils import get_logger
from crawler.frontier import Frontier
from crawler.worker import Worker


class Crawler(object):
    """
    Round-based multi-threaded crawler coordinator.

    Links found during a round are appended to the frontier but only
    dispatched by the next round. The crawl is complete when a round starts
    with as many scraped URLs as found URLs, or with nothing left to send.
    """

    def __init__(self, config, restart, frontier_factory=Frontier, worker_factory=Worker):
        """
        Initialize the crawler.

        Args:
            config: Configuration object (threads, base url, paths, etc.)
            restart: If True, start fresh; if False, resume from save files
            frontier_factory: Factory for creating frontier (for testing)
            worker_factory: Factory for creating workers (for testing)
        """
        self.config = config
        self.logger = get_logger("CRAWLER")
        self.frontier = frontier_factory(config, restart)
        self.workers = []
        self.worker_factory = worker_factory
        self.rounds = 0

    def start(self):
        """Run rounds until the crawl is complete."""
        self.logger.info(f"Base URL: {self.config.base_url}")
        while self.run_round():
            time.sleep(self.config.round_delay)

    def run_round(self):
        """
        Run one round: snapshot, dispatch, drain.

        Returns:
            False if the crawl is complete and no jobs were dispatched
        """
        total, scraped = self.frontier.status()
        self.logger.info(
            f"STATUS: TOTAL={total} SCRAPED={scraped} "
            f"UNSCRAPED={total - scraped}")
        if total == scraped:
            self.logger.info("Scraping completed successfully.")
            return False

        jobs = self.frontier.get_tbd_jobs()
        if not jobs:
            given_up = self.frontier.given_up_count()
            if given_up:
                self.logger.warning(
                    f"Stopping with {given_up} urls that failed "
                    f"{self.config.max_failures} times.")
            self.logger.info("Scraping completed successfully.")
            return False

        self.rounds += 1
        self.logger.info(
            f"Round {self.rounds}: dispatching {len(jobs)} urls starting at "
            f"index {jobs[0].index}.")

        # Sized for the snapshot plus one stop sentinel per worker
        queue = Queue(maxsize=len(jobs) + self.config.threads_count)
        for job in jobs:
            queue.put(job)
        for _ in range(self.config.threads_count):
            queue.put(None)

        self.workers = [
            self.worker_factory(worker_id, self.config, self.frontier, queue)
            for worker_id in range(1, self.config.threads_count + 1)
        ]
        for worker in self.workers:
            worker.start()
        self.join()
        return True

    def join(self):
        """Wait for all worker threads to complete."""
        for worker in self.workers:
            worker.join()
