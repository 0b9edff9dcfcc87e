"""Parsing of git log output and PR correlation for commits."""

import re
from dataclasses import fields
from typing import List, Optional

from figma_references.models import CommitWithPR, GitCommit, PRDetails, RepositoryInfo

# Must match the --pretty format used by the history source.
GIT_LOG_FORMAT = "%H|%an|%ad|%s"
FIELD_SEPARATOR = "|"
SHORT_HASH_LENGTH = 7

PR_NUMBER_PATTERN = re.compile(r"#(\d+)")


def parse_git_log_line(line: str) -> GitCommit:
    """Parse one "hash|author|date|message" line into a GitCommit.

    Missing fields become empty strings. Anything after the third separator
    belongs to the message.
    """
    parts = (line or "").split(FIELD_SEPARATOR, 3)
    parts += [""] * (4 - len(parts))
    commit_hash, author, date, message = parts

    return GitCommit(
        hash=commit_hash,
        short_hash=commit_hash[:SHORT_HASH_LENGTH],
        author=author,
        date=date,
        message=message,
    )


def parse_git_log_output(output: str) -> List[GitCommit]:
    """Parse full git log output, one commit per non-blank line."""
    if not output:
        return []
    return [parse_git_log_line(line) for line in output.splitlines() if line.strip()]


def extract_pr_number(message: str) -> Optional[str]:
    """Extract the PR number from a commit message.

    Squash merges on GitHub append "(#123)" to the subject; the first
    "#<digits>" in the message wins.

    Returns:
        The digits as a string, or None if there is no reference.
    """
    if not message or not isinstance(message, str):
        return None

    match = PR_NUMBER_PATTERN.search(message)
    return match.group(1) if match else None


def process_commit_with_pr(
    commit: GitCommit,
    https_url: str,
    repo_info: Optional[RepositoryInfo],
    pr_details: Optional[PRDetails] = None,
) -> CommitWithPR:
    """Attach PR number, URL and (optionally) details to a commit.

    The PR URL is built from the remote URL even when repo_info could not be
    resolved.

    Args:
        commit: The parsed commit.
        https_url: HTTPS form of the repository remote.
        repo_info: Repository identity, if the remote is a GitHub URL.
        pr_details: Already fetched PR details, if any.

    Returns:
        A new CommitWithPR; the input commit is left untouched.
    """
    base = {f.name: getattr(commit, f.name) for f in fields(GitCommit)}
    pr_number = extract_pr_number(commit.message)
    if not pr_number:
        return CommitWithPR(**base)

    return CommitWithPR(
        **base,
        pr_number=pr_number,
        pr_url=f"{https_url}/pull/{pr_number}",
        pr_details=pr_details,
    )
