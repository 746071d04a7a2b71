"""Build today's digest and send it. Meant to be invoked by a scheduler (cron, CI)."""
import argparse
import asyncio
import logging
import sys

from rss_digest import DigestConfig, DigestError, DigestPipeline
from rss_digest.logging_config import configure_logging

logger = logging.getLogger("send_daily_digest")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--topic",
        action="append",
        dest="topics",
        help="Feed topic to include (repeatable). Defaults to DIGEST_TOPICS or 'tech'.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Render the digest but do not send it.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging()

    # Reads RESEND_API_KEY, RESEND_AUDIENCE_ID etc. from .env / the environment.
    config = DigestConfig.from_env()
    if args.topics:
        config.topics = args.topics
    if args.dry_run:
        config.dry_run = True

    try:
        result = asyncio.run(DigestPipeline(config).run())
    except (DigestError, ValueError):
        logger.exception("Daily digest run failed")
        return 1

    logger.info("Sent %r with %d items (id=%s)", result.subject, len(result.items), result.message_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
