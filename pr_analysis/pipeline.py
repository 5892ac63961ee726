"""Concurrent analysis of all configured repositories."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Set, Tuple

import requests

from .analyzer import RepositoryAnalyzer
from .api_client import GitHubAPIClient
from .cache import EmailCache
from .errors import ReferenceParseError, UpstreamApiError
from .fetcher import PullRequestFetcher
from .models import RepositoryAnalysis, TimeWindow
from .repo_ref import parse_repository_url


def _analyze_one(repo_url: str, window: TimeWindow, fetcher: PullRequestFetcher,
                 analyzer: RepositoryAnalyzer) -> Tuple[str, RepositoryAnalysis]:
    repo = parse_repository_url(repo_url)
    pull_requests = fetcher.fetch(repo, window)
    return repo.full_name, analyzer.analyze(repo, pull_requests)


def _log_failure(repo_url: str, error: Exception):
    """Log a repository failure with whatever response details are available."""
    if isinstance(error, UpstreamApiError):
        logging.error(f"Error processing {repo_url}: {error}")
        logging.error(f"Status: {error.status}")
        logging.error(f"Headers: {error.headers}")
        logging.error(f"Data: {error.body}")
    elif isinstance(error, (ReferenceParseError, requests.RequestException)):
        logging.error(f"Error processing {repo_url}: {error}")
    else:
        logging.error(f"Error processing {repo_url}: {error}", exc_info=error)


def analyze_repositories(
    repo_urls: List[str],
    window: TimeWindow,
    api_client: GitHubAPIClient,
    excluded_users: Set[str] = None,
    max_workers: Optional[int] = None,
    email_cache: Optional[EmailCache] = None,
    fetcher: Optional[PullRequestFetcher] = None
) -> Dict[str, RepositoryAnalysis]:
    """Analyze every repository concurrently, isolating failures per repository.

    Args:
        repo_urls: Repository references as configured
        window: Analysis window shared by all repositories
        api_client: GitHub API client
        excluded_users: Identities to ignore everywhere
        max_workers: Cap on repositories analyzed at once (default: all of them)
        email_cache: Per-run email cache (created if not given)
        fetcher: Pull request fetcher (created if not given)

    Returns:
        Analyses of the repositories that succeeded, keyed by "owner/name" in configured order
    """
    email_cache = email_cache or EmailCache(api_client)
    fetcher = fetcher or PullRequestFetcher(api_client)
    analyzer = RepositoryAnalyzer(api_client, email_cache, excluded_users)

    print(f"Starting analysis of {len(repo_urls)} repositories in parallel...")
    results: List[Optional[Tuple[str, RepositoryAnalysis]]] = [None] * len(repo_urls)

    workers = min(max_workers or len(repo_urls), len(repo_urls)) or 1
    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_index = {
            executor.submit(_analyze_one, url, window, fetcher, analyzer): index
            for index, url in enumerate(repo_urls)
        }

        for future in as_completed(future_to_index):
            index = future_to_index[future]
            try:
                results[index] = future.result()
            except Exception as e:
                _log_failure(repo_urls[index], e)

    analyses = {}
    for result in results:
        if result is not None:
            name, analysis = result
            analyses[name] = analysis

    failed = len(repo_urls) - sum(1 for r in results if r is not None)
    logging.info(f"Analyzed {len(repo_urls) - failed} repositories successfully, {failed} failed")
    return analyses
