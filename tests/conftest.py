"""Shared fixtures: an in-memory stand-in for the GitHub API client."""

from datetime import datetime, timedelta, timezone
from threading import Lock

import pytest

from pr_analysis.errors import UpstreamApiError
from pr_analysis.models import GITHUB_TIMESTAMP_FORMAT, RateLimitInfo

BASE_TIME = datetime(2024, 2, 1, 12, 0, 0, tzinfo=timezone.utc)


def ts(hours: float = 0) -> str:
    """GitHub timestamp `hours` after BASE_TIME."""
    return (BASE_TIME + timedelta(hours=hours)).strftime(GITHUB_TIMESTAMP_FORMAT)


def make_pr(number, author='alice', created=0, updated=None, merged=None):
    return {
        'number': number,
        'user': {'login': author} if author else None,
        'created_at': ts(created),
        'updated_at': ts(created if updated is None else updated),
        'merged_at': ts(merged) if merged is not None else None,
    }


def make_review(reviewer, submitted):
    return {'user': {'login': reviewer} if reviewer else None, 'submitted_at': ts(submitted)}


class FakeGitHubClient:
    """Serves canned data per repository and records the calls made."""

    def __init__(self, per_page=100):
        self.per_page = per_page
        self.pulls = {}        # "owner/repo" -> list of PR payloads, newest update first
        self.reviews = {}      # ("owner/repo", number) -> list of review payloads
        self.details = {}      # ("owner/repo", number) -> detail payload
        self.users = {}        # login -> user payload
        self.failures = {}     # "owner/repo" -> exception raised on list
        self.user_calls = []
        self.page_calls = []
        self._lock = Lock()

    def list_closed_pull_requests(self, owner, repo, page, per_page=100):
        name = f"{owner}/{repo}"
        with self._lock:
            self.page_calls.append((name, page))
        if name in self.failures:
            raise self.failures[name]
        items = self.pulls.get(name, [])
        start = (page - 1) * per_page
        rate_limit = RateLimitInfo(limit=5000, remaining=4999 - page, used=page, reset_timestamp=1700000000)
        return items[start:start + per_page], rate_limit

    def list_reviews(self, owner, repo, number):
        return list(self.reviews.get((f"{owner}/{repo}", number), []))

    def get_pull_request(self, owner, repo, number):
        return dict(self.details.get((f"{owner}/{repo}", number), {}))

    def get_user(self, login):
        with self._lock:
            self.user_calls.append(login)
        if login not in self.users:
            raise UpstreamApiError(f"User {login} not found", status=404)
        return self.users[login]


@pytest.fixture
def fake_client():
    return FakeGitHubClient()


@pytest.fixture
def scenario_client(fake_client):
    """One repository with two merged, reviewed PRs."""
    fake_client.pulls['acme/widgets'] = [
        make_pr(1, author='alice', created=0, updated=30, merged=10),
        make_pr(2, author='bob', created=0, updated=30, merged=30),
    ]
    fake_client.reviews[('acme/widgets', 1)] = [make_review('bob', 1)]
    fake_client.reviews[('acme/widgets', 2)] = [make_review('carol', 3)]
    fake_client.details[('acme/widgets', 1)] = {'additions': 40, 'deletions': 10, 'changed_files': 2}
    fake_client.details[('acme/widgets', 2)] = {'additions': 100, 'deletions': 50, 'changed_files': 4}
    fake_client.users = {
        'alice': {'login': 'alice', 'email': 'alice@example.com'},
        'bob': {'login': 'bob', 'email': None},
        'carol': {'login': 'carol', 'email': 'carol@example.com'},
    }
    return fake_client
