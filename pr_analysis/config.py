"""Configuration loaded from environment variables."""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Set

from .errors import ConfigurationError


@dataclass
class Settings:
    """Run configuration."""
    token: str
    repo_urls: List[str]
    since_days: Optional[int] = None
    interval_dates: Optional[str] = None
    excluded_users: Set[str] = field(default_factory=set)
    output_dir: str = '.'
    max_workers: Optional[int] = None
    max_retries: int = 3


def _split(value: Optional[str]) -> List[str]:
    """Split a comma-separated list, dropping blanks."""
    return [v.strip() for v in (value or '').split(',') if v.strip()]


def _optional_int(environ: Mapping[str, str], key: str, default: Optional[int]) -> Optional[int]:
    value = environ.get(key)
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        parsed = -1
    if parsed < 0:
        logging.warning(f"Invalid {key} value '{value}', using default: {default}")
        return default
    return parsed


def load_settings(environ: Mapping[str, str] = None) -> Settings:
    """Read the run configuration from the environment.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Parsed Settings

    Raises:
        ConfigurationError: If GITHUB_TOKEN or REPO_URLS is missing, or no usable
                            SINCE_DAYS / INTERVAL_DATES is given
    """
    environ = os.environ if environ is None else environ

    token = (environ.get('GITHUB_TOKEN') or '').strip()
    repo_urls = _split(environ.get('REPO_URLS'))
    if not token or not repo_urls:
        raise ConfigurationError("Please define GITHUB_TOKEN, REPO_URLS in your .env file.")
    logging.info(f"Using repositories: {', '.join(repo_urls)}")

    interval_dates = (environ.get('INTERVAL_DATES') or '').strip() or None
    since_days = None
    days_env = (environ.get('SINCE_DAYS') or '').strip()
    if days_env:
        try:
            since_days = int(days_env)
        except ValueError:
            since_days = None
        if since_days is None or since_days <= 0:
            if not interval_dates:
                raise ConfigurationError(f"SINCE_DAYS must be a positive integer, got '{days_env}'")
            logging.warning(f"Ignoring invalid SINCE_DAYS value '{days_env}', INTERVAL_DATES is set")
            since_days = None
    elif not interval_dates:
        raise ConfigurationError("Please define SINCE_DAYS or INTERVAL_DATES in your .env file.")

    excluded_users = set(_split(environ.get('EXCLUDED_USERS')))
    if excluded_users:
        logging.info(f"Excluding users: {', '.join(sorted(excluded_users))}")

    max_workers = _optional_int(environ, 'MAX_WORKERS', None) or None

    return Settings(
        token=token,
        repo_urls=repo_urls,
        since_days=since_days,
        interval_dates=interval_dates,
        excluded_users=excluded_users,
        output_dir=(environ.get('OUTPUT_DIR') or '.').strip() or '.',
        max_workers=max_workers,
        max_retries=_optional_int(environ, 'MAX_RETRIES', 3)
    )
