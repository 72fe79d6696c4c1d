"""
launch.py - Site Crawler Entry Point

Main entry point for the crawler application.
Handles configuration loading and crawler initialization.

Usage:
    python launch.py                    # Resume from last state
    python launch.py --restart          # Start fresh crawl
    python launch.py --config_file path # Use custom config file
"""

import os
import sys
from configparser import ConfigParser
from argparse import ArgumentParser

from dotenv import load_dotenv

from utils import get_logger
from utils.config import Config, ConfigurationError
from crawler import Crawler


def main(config_file, restart):
    """
    Initialize and run the crawler to completion.

    Args:
        config_file: Path to configuration file (default: config.ini)
        restart: If True, start fresh; if False, resume from save files

    Returns:
        Process exit status
    """
    logger = get_logger("LAUNCH")

    # .env values override config.ini, without clobbering the real environment
    load_dotenv(".env")
    cparser = ConfigParser()
    cparser.read(config_file)
    try:
        config = Config(cparser, os.environ)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    crawler = Crawler(config, restart)
    crawler.start()
    return 0


if __name__ == "__main__":
    parser = ArgumentParser()
    parser.add_argument("--restart", action="store_true", default=False,
                        help="Start fresh crawl (vs. resume from save files)")
    parser.add_argument("--config_file", type=str, default="config.ini",
                        help="Path to configuration file")
    args = parser.parse_args()
    sys.exit(main(args.config_file, args.restart))
