"""Exception hierarchy for the pull request analysis pipeline."""

from typing import Dict, Optional


class PRAnalysisError(Exception):
    """Base class for all errors raised by the analysis pipeline."""


class ConfigurationError(PRAnalysisError):
    """Mandatory configuration is missing or malformed."""


class ReferenceParseError(PRAnalysisError):
    """A repository reference could not be split into owner and name."""


class UpstreamApiError(PRAnalysisError):
    """The GitHub API answered with a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None,
                 headers: Optional[Dict[str, str]] = None, body=None):
        """Initialize the error.

        Args:
            message: Human readable description
            status: HTTP status code, if a response was received
            headers: Response headers, if available
            body: Decoded response body (JSON or text), if available
        """
        super().__init__(message)
        self.status = status
        self.headers = headers or {}
        self.body = body


class RateLimitExceeded(UpstreamApiError):
    """The GitHub API rejected a request because the rate limit is exhausted."""
