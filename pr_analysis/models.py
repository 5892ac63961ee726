"""Data models for GitHub pull request analysis."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Optional

# Recorded when a user has no public email or the lookup failed
EMAIL_NOT_AVAILABLE = 'Not available'

GITHUB_TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%SZ'


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub API timestamp into an aware UTC datetime."""
    if not value:
        return None
    return datetime.strptime(value, GITHUB_TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed time from start to end in hours."""
    return (end - start).total_seconds() / 3600


@dataclass(frozen=True)
class TimeWindow:
    """Analysis window; an unset end means "up to now"."""
    start: datetime
    end: Optional[datetime] = None

    def __post_init__(self):
        if self.end is not None and self.start > self.end:
            raise ValueError(f"Window start {self.start.isoformat()} is after end {self.end.isoformat()}")

    def contains(self, timestamp: datetime) -> bool:
        return timestamp >= self.start and (self.end is None or timestamp <= self.end)

    def describe(self) -> str:
        end = self.end.strftime('%Y-%m-%d') if self.end else 'now'
        return f"{self.start.strftime('%Y-%m-%d')} to {end}"


@dataclass(frozen=True)
class RepositoryRef:
    """Owner and name of a GitHub repository."""
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class PullRequestSummary:
    """The fields of a listed pull request needed for the analysis."""
    number: int
    author: Optional[str]
    created_at: datetime
    updated_at: datetime
    merged_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict) -> 'PullRequestSummary':
        user = data.get('user') or {}
        return cls(
            number=data['number'],
            author=user.get('login'),
            created_at=parse_timestamp(data['created_at']),
            updated_at=parse_timestamp(data['updated_at']),
            merged_at=parse_timestamp(data.get('merged_at')),
        )


@dataclass(frozen=True)
class ReviewEvent:
    """A submitted review on a pull request."""
    reviewer: Optional[str]
    submitted_at: Optional[datetime]

    @classmethod
    def from_api(cls, data: Dict) -> 'ReviewEvent':
        user = data.get('user') or {}
        return cls(reviewer=user.get('login'), submitted_at=parse_timestamp(data.get('submitted_at')))


@dataclass(frozen=True)
class PullRequestDetail:
    """Size information from the single pull request endpoint."""
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0

    @property
    def size(self) -> int:
        return self.additions + self.deletions

    @classmethod
    def from_api(cls, data: Dict) -> 'PullRequestDetail':
        return cls(
            additions=data.get('additions') or 0,
            deletions=data.get('deletions') or 0,
            changed_files=data.get('changed_files') or 0,
        )


@dataclass
class ContributorRecord:
    """How often one identity authored or reviewed PRs in a repository."""
    identity: str
    email: str = EMAIL_NOT_AVAILABLE
    count: int = 0

    def increment(self, amount: int = 1):
        if amount < 0:
            raise ValueError("Contributor counts never decrease")
        self.count += amount


@dataclass
class RepositoryAnalysis:
    """Engagement maps and averaged metrics for a single repository."""
    pr_authors: Dict[str, ContributorRecord] = field(default_factory=dict)
    reviewers: Dict[str, ContributorRecord] = field(default_factory=dict)
    average_cycle_time: Decimal = Decimal(0)
    average_review_time: Decimal = Decimal(0)
    adjusted_review_time: Decimal = Decimal(0)
    average_pr_size: Decimal = Decimal(0)
    average_files_per_pr: Decimal = Decimal(0)


@dataclass(frozen=True)
class RateLimitInfo:
    """GitHub API rate limit information extracted from response headers."""
    limit: int
    remaining: int
    used: int
    reset_timestamp: int
    resource: Optional[str] = None

    @property
    def is_exceeded(self) -> bool:
        return self.remaining == 0

    @classmethod
    def from_headers(cls, headers) -> Optional['RateLimitInfo']:
        """Build from X-RateLimit-* headers, or None if they are absent or unparsable."""
        if headers is None or 'X-RateLimit-Limit' not in headers:
            return None
        try:
            return cls(
                limit=int(headers.get('X-RateLimit-Limit', 0)),
                remaining=int(headers.get('X-RateLimit-Remaining', 0)),
                used=int(headers.get('X-RateLimit-Used', 0)),
                reset_timestamp=int(headers.get('X-RateLimit-Reset', 0)),
                resource=headers.get('X-RateLimit-Resource'),
            )
        except (TypeError, ValueError):
            return None

    def __str__(self) -> str:
        return (f"Limit={self.limit}, Remaining={self.remaining}, Used={self.used}, "
                f"Reset={self.reset_timestamp}, Resource={self.resource}")
