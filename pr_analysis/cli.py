"""Command line entry point."""

import logging
import os
import sys

from dotenv import load_dotenv

from .aggregator import ContributorAggregator
from .api_client import GitHubAPIClient
from .config import load_settings
from .errors import ConfigurationError
from .pipeline import analyze_repositories
from .report import ReportWriter
from .window import resolve_window


def configure_logging():
    """Configure root logging (level can be overridden by LOG_LEVEL)."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )


def main() -> int:
    """Run the analysis and write the reports.

    Returns:
        0 on success, even if individual repositories failed
    """
    # Load environment variables from .env file if it exists
    load_dotenv()
    configure_logging()

    print("GitHub Pull Request Analysis")
    print("=" * 80)

    try:
        settings = load_settings()
        window = resolve_window(settings.since_days, settings.interval_dates)
    except ConfigurationError as e:
        logging.error(str(e))
        sys.exit(1)

    api_client = GitHubAPIClient(settings.token, max_retries=settings.max_retries)
    analyses = analyze_repositories(
        settings.repo_urls,
        window,
        api_client,
        excluded_users=settings.excluded_users,
        max_workers=settings.max_workers
    )

    aggregator = ContributorAggregator().add_all(analyses)
    ReportWriter(settings.output_dir).write(analyses, aggregator)
    return 0


if __name__ == "__main__":
    sys.exit(main())
