"""GitHub API client for making requests and handling pagination."""

import logging
from typing import Dict, List, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import RateLimitExceeded, UpstreamApiError
from .models import RateLimitInfo

GITHUB_API_URL = 'https://api.github.com'
DEFAULT_PER_PAGE = 100


def _decode_body(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text


def _is_rate_limited(response: requests.Response) -> bool:
    if response.status_code not in (403, 429):
        return False
    rate_limit = RateLimitInfo.from_headers(response.headers)
    if rate_limit and rate_limit.is_exceeded:
        return True
    return 'rate limit' in (response.text or '').lower()


class GitHubAPIClient:
    """Handles GitHub REST API requests with error translation and pagination."""

    def __init__(self, token: str = None, base_url: str = GITHUB_API_URL,
                 max_retries: int = 3, pool_size: int = 50):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
            base_url: Root URL of the REST API
            max_retries: Retries for 5xx server errors (rate limit responses are never retried)
            pool_size: Connection pool size, large enough for all concurrent workers
        """
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()

        adapter = HTTPAdapter(
            pool_connections=pool_size,
            pool_maxsize=pool_size,
            max_retries=Retry(
                total=max_retries,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=['GET'],
                respect_retry_after_header=False,
                raise_on_status=False
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)
        self.session.headers.update({'Accept': 'application/vnd.github.v3+json'})

        if self.token:
            self.session.headers.update({'Authorization': f'token {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Rate limits will be much lower.")

    def _url(self, path: str) -> str:
        if path.startswith('http://') or path.startswith('https://'):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, path: str, params: Dict = None) -> requests.Response:
        """Issue a GET request and translate error responses into exceptions.

        Raises:
            RateLimitExceeded: If GitHub reports an exhausted rate limit
            UpstreamApiError: For any other non-success status
        """
        url = self._url(path)
        response = self.session.get(url, params=params)

        if _is_rate_limited(response):
            raise RateLimitExceeded(
                f"Rate limit exceeded for {url}",
                status=response.status_code,
                headers=dict(response.headers),
                body=_decode_body(response)
            )

        if not response.ok:
            raise UpstreamApiError(
                f"GitHub API returned {response.status_code} for {url}",
                status=response.status_code,
                headers=dict(response.headers),
                body=_decode_body(response)
            )

        return response

    def get_page(self, path: str, params: Dict = None) -> Tuple[List[Dict], Optional[RateLimitInfo]]:
        """Fetch a single page of a list endpoint.

        Returns:
            Tuple of (items on the page, rate limit telemetry of the response)
        """
        response = self._request(path, params)
        return response.json(), RateLimitInfo.from_headers(response.headers)

    def get_paginated(self, path: str, params: Dict = None) -> List[Dict]:
        """Fetch all pages of a paginated GitHub API endpoint.

        Args:
            path: API path or absolute URL
            params: Query parameters

        Returns:
            List of all items from all pages
        """
        results = []
        page = 1
        params = dict(params or {})
        params['per_page'] = DEFAULT_PER_PAGE

        while True:
            params['page'] = page
            logging.debug(f"Fetching page {page} from {path}")
            data, _ = self.get_page(path, params)

            if not data:
                break

            results.extend(data)

            if len(data) < DEFAULT_PER_PAGE:
                break

            page += 1

        logging.debug(f"Fetched {len(results)} total items from {path}")
        return results

    def get_json(self, path: str) -> Dict:
        """Make a single GET request and return the decoded JSON body."""
        return self._request(path).json()

    def list_closed_pull_requests(self, owner: str, repo: str, page: int,
                                  per_page: int = DEFAULT_PER_PAGE) -> Tuple[List[Dict], Optional[RateLimitInfo]]:
        """Fetch one page of closed PRs, most recently updated first."""
        return self.get_page(f"repos/{owner}/{repo}/pulls", {
            'state': 'closed',
            'sort': 'updated',
            'direction': 'desc',
            'per_page': per_page,
            'page': page
        })

    def list_reviews(self, owner: str, repo: str, number: int) -> List[Dict]:
        """Fetch all reviews of a PR in submission order."""
        return self.get_paginated(f"repos/{owner}/{repo}/pulls/{number}/reviews")

    def get_pull_request(self, owner: str, repo: str, number: int) -> Dict:
        return self.get_json(f"repos/{owner}/{repo}/pulls/{number}")

    def get_user(self, login: str) -> Dict:
        return self.get_json(f"users/{login}")
