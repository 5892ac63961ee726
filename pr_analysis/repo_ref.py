"""Parsing of repository references such as https://github.com/owner/repo.git."""

from urllib.parse import urlparse

from .errors import ReferenceParseError
from .models import RepositoryRef


def parse_repository_url(url: str) -> RepositoryRef:
    """Extract owner and repository name from a URL-like reference.

    Bare "owner/repo" strings are accepted as well. A trailing ".git" is
    stripped from the repository name.

    Args:
        url: Repository URL or "owner/repo" reference

    Returns:
        RepositoryRef for the referenced repository

    Raises:
        ReferenceParseError: If fewer than two path segments are present
    """
    segments = [s for s in urlparse(url.strip()).path.split('/') if s]
    if len(segments) < 2:
        raise ReferenceParseError(f"Cannot determine owner and repository from '{url}'")

    owner, name = segments[0], segments[1]
    if name.endswith('.git'):
        name = name[:-len('.git')]
    if not name:
        raise ReferenceParseError(f"Empty repository name in '{url}'")
    return RepositoryRef(owner=owner, name=name)
