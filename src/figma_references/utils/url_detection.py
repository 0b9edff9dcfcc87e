"""Utility functions for extracting Figma and Jira links from text."""

import re
from typing import List, Tuple

# https://figma.com/file/..., https://www.figma.com/design/...
FIGMA_URL_PATTERN = re.compile(
    r"https?://(?:www\.)?figma\.com/(?:design/|file/)\S+",
    re.IGNORECASE,
)

# https://company.atlassian.net/browse/PAY-123
# Only scheme and host are case-insensitive; the project key must be uppercase.
JIRA_URL_PATTERN = re.compile(
    r"(?i:https?://(?:www\.)?[^/\s]+\.atlassian\.net/browse/)[A-Z]+-\d+"
)


def _find_all(pattern: "re.Pattern[str]", text) -> List[str]:
    if not text or not isinstance(text, str):
        return []
    return [match.group(0) for match in pattern.finditer(text)]


def find_figma_urls(text: str) -> List[str]:
    """Extract all Figma design/file URLs from text.

    Looks for links like:
    - https://figma.com/file/abc123
    - https://www.figma.com/design/xyz789/Screen?node-id=1-2

    Args:
        text: Text to search.

    Returns:
        URLs in order of appearance, duplicates included. Empty list for
        None, non-string, or text without matches.
    """
    return _find_all(FIGMA_URL_PATTERN, text)


def find_jira_urls(text: str) -> List[str]:
    """Extract all Jira issue browse URLs from text.

    Args:
        text: Text to search.

    Returns:
        URLs in order of appearance, duplicates included. Empty list for
        None, non-string, or text without matches.
    """
    return _find_all(JIRA_URL_PATTERN, text)


def extract_urls_from_text(text: str) -> Tuple[List[str], List[str]]:
    """Extract Figma and Jira URLs from a PR body in one pass.

    Returns:
        Tuple of (figma_urls, jira_urls).
    """
    return find_figma_urls(text), find_jira_urls(text)
