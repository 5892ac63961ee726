"""Time-to-first-review samples for a set of pull requests."""

import logging
from typing import Dict, List, Optional

from .api_client import GitHubAPIClient
from .models import PullRequestSummary, RepositoryRef, ReviewEvent, hours_between


class ReviewTimeCollector:
    """Collects the hours between PR creation and its first review."""

    def __init__(self, api_client: GitHubAPIClient):
        self.api_client = api_client

    def collect(self, repo: RepositoryRef, pull_requests: List[PullRequestSummary],
                reviews_by_number: Optional[Dict[int, List[ReviewEvent]]] = None) -> List[float]:
        """Compute the time to first review for every reviewed PR.

        PRs without reviews are left out of the sample rather than counted as zero.

        Args:
            repo: Repository the PRs belong to
            pull_requests: PRs to inspect
            reviews_by_number: Reviews already retrieved, keyed by PR number; PRs
                               missing from it have their reviews fetched

        Returns:
            Review times in hours, in PR order
        """
        reviews_by_number = reviews_by_number or {}
        review_times = []

        for pr in pull_requests:
            reviews = reviews_by_number.get(pr.number)
            if reviews is None:
                reviews = [ReviewEvent.from_api(r)
                           for r in self.api_client.list_reviews(repo.owner, repo.name, pr.number)]

            if not reviews:
                continue

            first_review = reviews[0]
            if first_review.submitted_at is None:
                logging.debug(f"First review of PR #{pr.number} has no submission time, skipping")
                continue

            review_times.append(hours_between(pr.created_at, first_review.submitted_at))

        return review_times
