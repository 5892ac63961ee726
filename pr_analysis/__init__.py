"""GitHub PR Analysis - engagement, cycle-time and contributor statistics for closed PRs."""

from .models import (TimeWindow, RepositoryRef, PullRequestSummary, ReviewEvent, PullRequestDetail,
                     ContributorRecord, RepositoryAnalysis, RateLimitInfo, EMAIL_NOT_AVAILABLE)
from .errors import (PRAnalysisError, ConfigurationError, ReferenceParseError, UpstreamApiError,
                     RateLimitExceeded)
from .api_client import GitHubAPIClient
from .cache import EmailCache
from .window import resolve_window
from .repo_ref import parse_repository_url
from .fetcher import PullRequestFetcher
from .review_times import ReviewTimeCollector
from .stats import calculate_stats, SampleStats
from .analyzer import RepositoryAnalyzer
from .aggregator import ContributorAggregator
from .pipeline import analyze_repositories
from .report import ReportWriter

__all__ = [
    'TimeWindow',
    'RepositoryRef',
    'PullRequestSummary',
    'ReviewEvent',
    'PullRequestDetail',
    'ContributorRecord',
    'RepositoryAnalysis',
    'RateLimitInfo',
    'EMAIL_NOT_AVAILABLE',
    'PRAnalysisError',
    'ConfigurationError',
    'ReferenceParseError',
    'UpstreamApiError',
    'RateLimitExceeded',
    'GitHubAPIClient',
    'EmailCache',
    'resolve_window',
    'parse_repository_url',
    'PullRequestFetcher',
    'ReviewTimeCollector',
    'calculate_stats',
    'SampleStats',
    'RepositoryAnalyzer',
    'ContributorAggregator',
    'analyze_repositories',
    'ReportWriter',
]
