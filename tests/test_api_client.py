"""
Unit tests for API client functionality
"""

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from unittest.mock import Mock

from pr_analysis.api_client import GitHubAPIClient
from pr_analysis.errors import RateLimitExceeded, UpstreamApiError
from pr_analysis.models import RateLimitInfo

RATE_HEADERS = {
    'X-RateLimit-Limit': '5000',
    'X-RateLimit-Remaining': '4990',
    'X-RateLimit-Used': '10',
    'X-RateLimit-Reset': '1700000000',
    'X-RateLimit-Resource': 'core',
}


def make_response(status_code=200, json_data=None, headers=None, text=''):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.headers = headers if headers is not None else dict(RATE_HEADERS)
    response.json.return_value = json_data
    response.text = text
    return response


@pytest.fixture
def client():
    """Create a client with a mocked session."""
    client = GitHubAPIClient(token='test_token', max_retries=0)
    client.session = Mock()
    return client


class TestInitialization:
    """Test cases for client setup."""

    def test_token_sets_authorization_header(self):
        client = GitHubAPIClient(token='test_token')
        assert client.session.headers['Authorization'] == 'token test_token'

    def test_without_token(self):
        client = GitHubAPIClient()
        assert 'Authorization' not in client.session.headers

    def test_rate_limit_responses_not_retried(self):
        """Test that only 5xx responses are configured for retry."""
        client = GitHubAPIClient(token='test_token')
        retry = client.session.get_adapter('https://api.github.com').max_retries
        assert 403 not in retry.status_forcelist
        assert 429 not in retry.status_forcelist
        assert retry.respect_retry_after_header is False


class TestErrorTranslation:
    """Test cases for API error handling."""

    def test_rate_limit_exhausted(self, client):
        headers = dict(RATE_HEADERS, **{'X-RateLimit-Remaining': '0'})
        client.session.get.return_value = make_response(403, {'message': 'API rate limit exceeded'}, headers,
                                                        text='{"message": "API rate limit exceeded"}')

        with pytest.raises(RateLimitExceeded) as exc_info:
            client.get_json('users/octocat')

        assert exc_info.value.status == 403
        assert exc_info.value.headers['X-RateLimit-Remaining'] == '0'
        assert exc_info.value.body == {'message': 'API rate limit exceeded'}

    def test_secondary_rate_limit_message(self, client):
        client.session.get.return_value = make_response(
            429, {'message': 'You have exceeded a secondary rate limit'}, {},
            text='You have exceeded a secondary rate limit')

        with pytest.raises(RateLimitExceeded):
            client.get_json('users/octocat')

    def test_forbidden_without_rate_limit_is_upstream_error(self, client):
        client.session.get.return_value = make_response(403, {'message': 'Resource not accessible'},
                                                        text='Resource not accessible')

        with pytest.raises(UpstreamApiError) as exc_info:
            client.get_json('repos/a/b/pulls/1')

        assert not isinstance(exc_info.value, RateLimitExceeded)
        assert exc_info.value.status == 403

    def test_404_error(self, client):
        client.session.get.return_value = make_response(404, {'message': 'Not Found'}, text='Not Found')

        with pytest.raises(UpstreamApiError) as exc_info:
            client.get_pull_request('a', 'b', 1)

        assert exc_info.value.status == 404
        assert exc_info.value.body == {'message': 'Not Found'}

    def test_network_error_propagates(self, client):
        client.session.get.side_effect = requests.exceptions.ConnectionError("Network error")

        with pytest.raises(requests.exceptions.ConnectionError):
            client.get_user('octocat')


class TestRequests:
    """Test cases for the endpoint helpers."""

    def test_list_closed_pull_requests_params(self, client):
        client.session.get.return_value = make_response(200, [{'number': 1}])

        data, rate_limit = client.list_closed_pull_requests('octo', 'hello', page=2, per_page=50)

        assert data == [{'number': 1}]
        assert rate_limit == RateLimitInfo(5000, 4990, 10, 1700000000, 'core')
        url = client.session.get.call_args[0][0]
        params = client.session.get.call_args[1]['params']
        assert url == 'https://api.github.com/repos/octo/hello/pulls'
        assert params == {'state': 'closed', 'sort': 'updated', 'direction': 'desc', 'per_page': 50, 'page': 2}

    def test_reviews_are_paginated(self, client):
        first_page = [{'id': i} for i in range(100)]
        second_page = [{'id': 100}]
        client.session.get.side_effect = [make_response(200, first_page), make_response(200, second_page)]

        reviews = client.list_reviews('octo', 'hello', 7)

        assert len(reviews) == 101
        assert client.session.get.call_count == 2
        assert client.session.get.call_args[0][0] == 'https://api.github.com/repos/octo/hello/pulls/7/reviews'

    def test_pagination_stops_on_empty_page(self, client):
        client.session.get.side_effect = [make_response(200, [{'id': i} for i in range(100)]),
                                          make_response(200, [])]

        assert len(client.get_paginated('repos/a/b/pulls/1/reviews')) == 100
        assert client.session.get.call_count == 2

    def test_pagination_reads_every_full_page(self, client):
        pages = [[{'id': i} for i in range(100)], [{'id': i} for i in range(100, 200)], [{'id': 200}]]
        requested = []

        def get(url, params=None):
            requested.append((params['page'], params['per_page'], params['state']))
            return make_response(200, pages[params['page'] - 1])

        client.session.get.side_effect = get

        items = client.get_paginated('repos/a/b/pulls/1/reviews', {'state': 'all'})

        assert [item['id'] for item in items] == list(range(201))
        assert requested == [(1, 100, 'all'), (2, 100, 'all'), (3, 100, 'all')]

    def test_get_user(self, client):
        client.session.get.return_value = make_response(200, {'login': 'octocat', 'email': 'o@example.com'})
        assert client.get_user('octocat')['email'] == 'o@example.com'
        assert client.session.get.call_args[0][0] == 'https://api.github.com/users/octocat'


class TestRateLimitInfo:
    """Test cases for rate limit header parsing."""

    def test_parse_headers(self):
        info = RateLimitInfo.from_headers(RATE_HEADERS)
        assert info.limit == 5000
        assert info.remaining == 4990
        assert info.used == 10
        assert info.resource == 'core'
        assert not info.is_exceeded

    def test_missing_headers(self):
        assert RateLimitInfo.from_headers({}) is None

    def test_unparsable_headers(self):
        assert RateLimitInfo.from_headers({'X-RateLimit-Limit': 'lots'}) is None

    def test_case_insensitive_headers(self):
        headers = CaseInsensitiveDict({'x-ratelimit-limit': '60', 'x-ratelimit-remaining': '0'})
        info = RateLimitInfo.from_headers(headers)
        assert info.limit == 60
        assert info.is_exceeded
