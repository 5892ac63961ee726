"""Time-windowed retrieval of closed pull requests."""

import logging
from typing import Callable, List, Optional

from .api_client import DEFAULT_PER_PAGE, GitHubAPIClient
from .models import PullRequestSummary, RateLimitInfo, RepositoryRef, TimeWindow

# Warn once the remaining request budget drops below this
RATE_LIMIT_WARNING_THRESHOLD = 100


class PullRequestFetcher:
    """Fetches the closed PRs of a repository that were updated inside a window."""

    def __init__(self, api_client: GitHubAPIClient, per_page: int = DEFAULT_PER_PAGE,
                 on_rate_limit: Optional[Callable[[RepositoryRef, RateLimitInfo], None]] = None):
        """Initialize the fetcher.

        Args:
            api_client: GitHub API client
            per_page: Page size requested from the API
            on_rate_limit: Optional observer called with the rate limit telemetry of every page
        """
        self.api_client = api_client
        self.per_page = per_page
        self.on_rate_limit = on_rate_limit

    def fetch(self, repo: RepositoryRef, window: TimeWindow) -> List[PullRequestSummary]:
        """Fetch all closed PRs of a repository whose update time lies in the window.

        Pages are requested most recently updated first. Traversal stops at the
        first empty or short page; every received page is filtered by the window.

        Args:
            repo: Repository to fetch from
            window: Analysis window applied to the update time

        Returns:
            Matching PRs in the order returned by the API
        """
        logging.info(f"Fetching pull requests for {repo.full_name} from {window.describe()}...")

        pull_requests = []
        page = 1
        while True:
            data, rate_limit = self.api_client.list_closed_pull_requests(
                repo.owner, repo.name, page=page, per_page=self.per_page
            )
            self._report_rate_limit(repo, rate_limit)

            if not data:
                break

            for item in data:
                pr = PullRequestSummary.from_api(item)
                if window.contains(pr.updated_at):
                    pull_requests.append(pr)

            if len(data) < self.per_page:
                break
            page += 1

        logging.info(f"Found {len(pull_requests)} closed PRs in {repo.full_name} ({page} pages)")
        return pull_requests

    def _report_rate_limit(self, repo: RepositoryRef, rate_limit: Optional[RateLimitInfo]):
        if rate_limit is None:
            return

        logging.info(f"Rate limit from GitHub API: {rate_limit}")
        if rate_limit.remaining < RATE_LIMIT_WARNING_THRESHOLD:
            logging.warning(f"Only {rate_limit.remaining} of {rate_limit.limit} API requests remaining "
                            f"while fetching {repo.full_name}")

        if self.on_rate_limit:
            self.on_rate_limit(repo, rate_limit)
