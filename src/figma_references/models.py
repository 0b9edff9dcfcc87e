"""Value types shared across the history scan."""

from dataclasses import dataclass, field
from typing import List, Optional

NO_DESCRIPTION_PLACEHOLDER = "No description available"


@dataclass(frozen=True)
class RepositoryInfo:
    """GitHub repository identity."""
    owner: str
    repo: str


@dataclass(frozen=True)
class PRDetails:
    """Pull request title/body and the links found in the body."""
    title: str
    body: str = NO_DESCRIPTION_PLACEHOLDER
    figma_urls: List[str] = field(default_factory=list)
    jira_urls: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "body": self.body,
            "figma_urls": list(self.figma_urls),
            "jira_urls": list(self.jira_urls),
        }


@dataclass(frozen=True)
class GitCommit:
    """A single commit parsed from git log output."""
    hash: str = ""
    short_hash: str = ""
    author: str = ""
    date: str = ""
    message: str = ""


@dataclass(frozen=True)
class CommitWithPR(GitCommit):
    """A commit plus the pull request it was merged through, when known."""
    pr_number: Optional[str] = None
    pr_url: Optional[str] = None
    pr_details: Optional[PRDetails] = None


@dataclass(frozen=True)
class FigmaReferenceResult:
    """One pull request that links to Figma designs."""
    pr_url: str
    author: str
    figma_urls: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "pr_url": self.pr_url,
            "author": self.author,
            "figma_urls": list(self.figma_urls),
        }
