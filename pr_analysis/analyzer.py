"""Per-repository analysis of pull request engagement and metrics."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Set

from .api_client import GitHubAPIClient
from .cache import EmailCache
from .models import (ContributorRecord, PullRequestDetail, PullRequestSummary, RepositoryAnalysis,
                     RepositoryRef, ReviewEvent, hours_between)
from .review_times import ReviewTimeCollector
from .stats import calculate_stats, mean


class RepositoryAnalyzer:
    """Computes author/reviewer engagement and PR metrics for one repository."""

    def __init__(
        self,
        api_client: GitHubAPIClient,
        email_cache: EmailCache,
        excluded_users: Set[str] = None,
        max_workers: int = 3
    ):
        """Initialize the analyzer.

        Args:
            api_client: GitHub API client
            email_cache: Per-run email cache shared by all repositories
            excluded_users: Identities that are ignored entirely
            max_workers: Concurrent requests per pull request
        """
        self.api_client = api_client
        self.email_cache = email_cache
        self.excluded_users = excluded_users or set()
        self.max_workers = max_workers
        self.review_time_collector = ReviewTimeCollector(api_client)

    def _is_counted(self, login: str) -> bool:
        if not login:
            return False
        if login in self.excluded_users:
            logging.debug(f"Skipping excluded user {login}")
            return False
        return True

    def analyze(self, repo: RepositoryRef, pull_requests: List[PullRequestSummary]) -> RepositoryAnalysis:
        """Analyze PRs sequentially, overlapping the requests made for each PR.

        Args:
            repo: Repository the PRs belong to
            pull_requests: Closed PRs inside the analysis window

        Returns:
            RepositoryAnalysis with engagement maps and averaged metrics
        """
        print(f"Analyzing {len(pull_requests)} PRs of {repo.full_name}...")

        analysis = RepositoryAnalysis()
        reviews_by_number: Dict[int, List[ReviewEvent]] = {}
        cycle_times = []
        pr_sizes = []
        files_per_pr = []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            for index, pr in enumerate(pull_requests, start=1):
                if self._is_counted(pr.author):
                    self._attribute(analysis.pr_authors, pr.author)

                future_reviews = executor.submit(self.api_client.list_reviews, repo.owner, repo.name, pr.number)
                future_details = executor.submit(self.api_client.get_pull_request, repo.owner, repo.name, pr.number)
                reviews = [ReviewEvent.from_api(r) for r in future_reviews.result()]
                detail = PullRequestDetail.from_api(future_details.result())
                reviews_by_number[pr.number] = reviews

                self._attribute_reviewers(executor, analysis.reviewers, reviews)

                if pr.merged_at:
                    cycle_times.append(hours_between(pr.created_at, pr.merged_at))

                if detail.size > 0:
                    pr_sizes.append(detail.size)
                if detail.changed_files > 0:
                    files_per_pr.append(detail.changed_files)

                if index % 10 == 0 or index == len(pull_requests):
                    print(f"  Progress: {index}/{len(pull_requests)} PRs analyzed", flush=True)

        review_stats = calculate_stats(
            self.review_time_collector.collect(repo, pull_requests, reviews_by_number)
        )

        analysis.average_cycle_time = mean(cycle_times)
        analysis.average_review_time = review_stats.mean
        analysis.adjusted_review_time = review_stats.mean_without_outliers
        analysis.average_pr_size = mean(pr_sizes)
        analysis.average_files_per_pr = mean(files_per_pr)

        logging.info(f"Completed analysis of {repo.full_name}: {len(analysis.pr_authors)} authors, "
                     f"{len(analysis.reviewers)} reviewers")
        return analysis

    def _attribute(self, records: Dict[str, ContributorRecord], login: str):
        """Count one contribution, resolving the email on first sight."""
        if login not in records:
            records[login] = ContributorRecord(login, self.email_cache.get(login))
        records[login].increment()

    def _attribute_reviewers(self, executor: ThreadPoolExecutor,
                             records: Dict[str, ContributorRecord], reviews: List[ReviewEvent]):
        """Count every review, looking up emails of new reviewers concurrently."""
        logins = [r.reviewer for r in reviews if self._is_counted(r.reviewer)]

        new_logins = list(dict.fromkeys(login for login in logins if login not in records))
        futures = {login: executor.submit(self.email_cache.get, login) for login in new_logins}
        # Join before the next PR is processed
        for login, future in futures.items():
            records[login] = ContributorRecord(login, future.result())

        for login in logins:
            records[login].increment()
