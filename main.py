"""
Entrypoint: load .env and config, set up logging, scrape one place, write JSON
"""

import argparse
import asyncio
import json
import os
import sys

import structlog
from dotenv import load_dotenv

from scraper import Config, ScrapeFailedError, SortType, ValidationError, scrape
from scraper.logging_config import setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Scrape Google Maps reviews for a place",
    )
    parser.add_argument("url", help="Place URL (https://www.google.com/maps/place/...)")
    parser.add_argument(
        "--sort",
        default="relevent",
        choices=list(SortType.__members__),
        help="Review ordering (default: relevent)",
    )
    parser.add_argument("--pages", default="max", help='Number of pages to fetch or "max" (default: max)')
    parser.add_argument("--query", default="", help="Only return reviews matching this text")
    parser.add_argument("--clean", action="store_true", help="Output cleaned reviews instead of raw records")
    parser.add_argument("--output", "-o", help="Write JSON here instead of stdout")
    parser.add_argument("--config", help="Path to an alternative config.yaml")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override logging.level from the config",
    )
    return parser.parse_args(argv)


def write_output(reviews, path=None):
    if path:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(reviews, f, ensure_ascii=False, indent=2)
    else:
        json.dump(reviews, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")


def main(argv=None) -> int:
    args = parse_args(argv)

    load_dotenv()
    config = Config(args.config)

    log_config = config.logging
    # Logs go to stderr when the reviews themselves are written to stdout.
    setup_logging(
        level=args.log_level or log_config.get('level', 'INFO'),
        json_output=bool(log_config.get('json', False)),
        stream=sys.stdout if args.output else sys.stderr,
    )
    logger = structlog.get_logger(__name__)

    try:
        reviews = asyncio.run(scrape(
            args.url,
            sort_type=args.sort,
            search_query=args.query,
            pages=args.pages,
            clean=args.clean,
            config=config,
        ))
    except ValidationError as e:
        logger.error("invalid_arguments", error=e.message)
        return 1
    except ScrapeFailedError as e:
        logger.error("scrape_failed", error=e.message)
        return 1
    except KeyboardInterrupt:
        logger.warning("scrape_interrupted")
        return 130

    write_output(reviews, args.output)
    logger.info("output_written", reviews=len(reviews), path=args.output or "stdout")
    return 0


if __name__ == "__main__":
    sys.exit(main())
