"""Helpers for turning git remote URLs into GitHub repository identities."""

import re
from typing import Optional

from figma_references.models import RepositoryInfo

GITHUB_URL_PATTERN = re.compile(r"^https?://(?:www\.)?github\.com/([^/]+)/([^/]+)")
SSH_URL_PATTERN = re.compile(r"^[^@/\s]+@([^:/\s]+):(.+)$")
GIT_SUFFIX = ".git"


def _strip_git_suffix(value: str) -> str:
    if value.endswith(GIT_SUFFIX):
        return value[:-len(GIT_SUFFIX)]
    return value


def extract_repository_info(url: str) -> Optional[RepositoryInfo]:
    """Extract owner and repo name from a GitHub HTTPS URL.

    Args:
        url: e.g. "https://github.com/owner/repo.git".

    Returns:
        RepositoryInfo, or None when the URL is not a github.com URL.
    """
    if not url or not isinstance(url, str):
        return None

    match = GITHUB_URL_PATTERN.match(url)
    if not match:
        return None

    return RepositoryInfo(owner=match.group(1), repo=_strip_git_suffix(match.group(2)))


def convert_ssh_to_https(url: str) -> str:
    """Convert an SSH remote ("git@github.com:owner/repo.git") to HTTPS.

    HTTPS input passes through. A trailing ".git" is always removed, so the
    conversion is idempotent.

    Returns:
        The HTTPS URL, or an empty string for empty/non-string input.
    """
    if not url or not isinstance(url, str):
        return ""

    https_url = url
    match = SSH_URL_PATTERN.match(https_url)
    if match:
        https_url = f"https://{match.group(1)}/{match.group(2)}"

    return _strip_git_suffix(https_url)
