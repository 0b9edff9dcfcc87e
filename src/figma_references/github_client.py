"""GitHub API client for fetching pull request details."""

import asyncio
import logging
from typing import Optional

from github import Auth, Github, UnknownObjectException

from figma_references.config import ConfigError
from figma_references.models import NO_DESCRIPTION_PLACEHOLDER, PRDetails
from figma_references.settings import TokenProvider
from figma_references.utils.url_detection import extract_urls_from_text

logger = logging.getLogger(__name__)


MISSING_TOKEN_MESSAGE = (
    "GitHub token not found. Please set the GITHUB_TOKEN environment variable "
    "or save a token with --save-token."
)


def transform_pr_data(title: Optional[str], body: Optional[str]) -> PRDetails:
    """Build PRDetails from raw PR fields, extracting Figma and Jira links.

    Args:
        title: PR title.
        body: PR description; None or empty means no description.

    Returns:
        PRDetails with the placeholder body when the PR has no description.
    """
    body = body or NO_DESCRIPTION_PLACEHOLDER
    figma_urls, jira_urls = extract_urls_from_text(body)
    return PRDetails(
        title=title or "",
        body=body,
        figma_urls=figma_urls,
        jira_urls=jira_urls,
    )


class GitHubClient:
    """Client for looking up pull requests on GitHub."""

    def __init__(self, token_provider: TokenProvider):
        """Initialize GitHub client.

        Args:
            token_provider: Callable returning a GitHub token or None.

        Raises:
            ConfigError: If no token is available.
        """
        token = token_provider()
        if not token:
            raise ConfigError(MISSING_TOKEN_MESSAGE)
        self._github = Github(auth=Auth.Token(token))

    def get_pr_details_sync(self, owner: str, repo: str, pr_number: str) -> Optional[PRDetails]:
        """Fetch a pull request and extract links from its description.

        Args:
            owner: Repository owner.
            repo: Repository name.
            pr_number: PR number as found in the commit message.

        Returns:
            PRDetails, or None if the PR does not exist.

        Raises:
            github.GithubException: On auth or API errors other than not-found.
            requests.exceptions.RequestException: On transport failures.
        """
        logger.debug(f"Getting PR info for {owner}/{repo}#{pr_number}")
        try:
            pr = self._github.get_repo(f"{owner}/{repo}", lazy=True).get_pull(int(pr_number))
        except UnknownObjectException:
            logger.debug(f"PR not found: {owner}/{repo}#{pr_number}")
            return None
        return transform_pr_data(pr.title, pr.body)

    async def get_pr_details(self, owner: str, repo: str, pr_number: str) -> Optional[PRDetails]:
        """Async wrapper running the blocking PyGithub call in a worker thread."""
        return await asyncio.to_thread(self.get_pr_details_sync, owner, repo, pr_number)
