"""Find Figma references in the git history of a file.

Commits are correlated to pull requests through the "(#123)" marker GitHub
adds to squash-merge subjects. PR descriptions are then fetched in small
concurrent groups, with a short pause between groups to stay clear of API
rate limits, and every PR that links a Figma design becomes a result.
Results are streamed to the caller as they are found.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence, Union

from figma_references.config import DEFAULT_CHUNK_CONFIG, ChunkConfig
from figma_references.git_log import parse_git_log_line, process_commit_with_pr
from figma_references.models import (
    CommitWithPR,
    FigmaReferenceResult,
    GitCommit,
    PRDetails,
    RepositoryInfo,
)
from figma_references.utils.repo_info import convert_ssh_to_https, extract_repository_info

logger = logging.getLogger(__name__)

HistoryEntry = Union[GitCommit, str]
PRFetcher = Callable[[str, str, str], Awaitable[Optional[PRDetails]]]
ResultCallback = Callable[[FigmaReferenceResult], None]
ProgressCallback = Callable[[int, int], None]


class FigmaReferenceError(Exception):
    """Raised when the history of a file cannot be searched at all."""
    pass


class HistorySource(Protocol):
    async def get_history(self, file_path: str) -> Sequence[HistoryEntry]: ...

    async def get_remote_url(self, file_path: str) -> str: ...


def filter_commits_with_figma_urls(commits: Sequence[CommitWithPR]) -> List[CommitWithPR]:
    """Keep only commits whose PR description links at least one Figma URL."""
    return [c for c in commits if c.pr_details is not None and c.pr_details.figma_urls]


def transform_to_figma_reference_result(commit: CommitWithPR) -> FigmaReferenceResult:
    return FigmaReferenceResult(
        pr_url=commit.pr_url or "",
        author=commit.author or "",
        figma_urls=list(commit.pr_details.figma_urls) if commit.pr_details else [],
    )


class FigmaReferenceService:
    """Scans file history and streams PRs that reference Figma designs."""

    def __init__(
        self,
        history_source: HistorySource,
        pr_fetcher: PRFetcher,
        chunk_config: Optional[ChunkConfig] = None,
    ):
        """Initialize the service.

        Args:
            history_source: Provides commits and the remote URL for a file.
            pr_fetcher: Async callable (owner, repo, pr_number) -> PRDetails or None.
            chunk_config: Group size and delay between groups.
        """
        self._history_source = history_source
        self._pr_fetcher = pr_fetcher
        self._chunk_config = chunk_config or DEFAULT_CHUNK_CONFIG

    async def _fetch_pr_details(
        self,
        commit: CommitWithPR,
        repo_info: Optional[RepositoryInfo],
    ) -> Optional[PRDetails]:
        if not commit.pr_number or repo_info is None:
            return None

        try:
            return await self._pr_fetcher(repo_info.owner, repo_info.repo, commit.pr_number)
        except Exception as e:
            logger.warning(
                f"Could not fetch PR #{commit.pr_number} for commit {commit.short_hash}: {e}"
            )
            return None

    async def _process_commit(
        self,
        commit: CommitWithPR,
        repo_info: Optional[RepositoryInfo],
    ) -> Optional[FigmaReferenceResult]:
        if not commit.pr_number:
            return None

        pr_details = await self._fetch_pr_details(commit, repo_info)
        if pr_details is None or not pr_details.figma_urls:
            return None

        return transform_to_figma_reference_result(replace(commit, pr_details=pr_details))

    async def _process_in_chunks(
        self,
        commits: List[CommitWithPR],
        repo_info: Optional[RepositoryInfo],
        on_result_found: Optional[ResultCallback],
        on_progress: Optional[ProgressCallback],
        cancel_event: Optional[asyncio.Event],
    ) -> List[FigmaReferenceResult]:
        results: List[FigmaReferenceResult] = []
        total = len(commits)
        processed = 0
        group_size = self._chunk_config.group_size

        async def run_one(commit: CommitWithPR) -> None:
            nonlocal processed
            result = await self._process_commit(commit, repo_info)
            processed += 1

            if result is not None:
                results.append(result)
                if on_result_found:
                    on_result_found(result)
            if on_progress:
                on_progress(processed, total)

        for start in range(0, total, group_size):
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Search cancelled after {processed} of {total} commit(s)")
                break

            group = commits[start:start + group_size]
            await asyncio.gather(*(run_one(commit) for commit in group))

            if start + group_size < total:
                await asyncio.sleep(self._chunk_config.inter_group_delay)

        return results

    async def find_figma_references(
        self,
        file_path: str,
        on_result_found: Optional[ResultCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[FigmaReferenceResult]:
        """Find PRs in a file's history whose descriptions link Figma designs.

        Args:
            file_path: File whose history is searched.
            on_result_found: Called with each result as soon as it is found.
            on_progress: Called with (processed, total) after every commit.
            cancel_event: When set, the search stops before the next group.

        Returns:
            All results, in the order they were found.

        Raises:
            FigmaReferenceError: If the history cannot be read.
        """
        try:
            history = await self._history_source.get_history(file_path)
        except Exception as e:
            raise FigmaReferenceError(f"Failed to find Figma references: {e}") from e

        if not history:
            logger.info(f"No git history found for {file_path}")
            return []

        try:
            remote_url = await self._history_source.get_remote_url(file_path)
        except Exception as e:
            logger.warning(f"Could not read remote URL for {file_path}: {e}")
            remote_url = ""
        https_url = convert_ssh_to_https(remote_url)
        repo_info = extract_repository_info(https_url) if https_url else None
        if repo_info is None:
            logger.warning(f"Remote is not a GitHub repository, PRs cannot be looked up: {remote_url!r}")

        commits = [self._to_commit_with_pr(entry, https_url, repo_info) for entry in history]
        logger.info(f"Checking {len(commits)} commit(s) in groups of {self._chunk_config.group_size}")

        results = await self._process_in_chunks(
            commits, repo_info, on_result_found, on_progress, cancel_event
        )
        logger.info(f"Found {len(results)} PR(s) with Figma references")
        return results

    @staticmethod
    def _to_commit_with_pr(
        entry: HistoryEntry,
        https_url: str,
        repo_info: Optional[RepositoryInfo],
    ) -> CommitWithPR:
        if isinstance(entry, str):
            entry = parse_git_log_line(entry)
        if isinstance(entry, CommitWithPR) and entry.pr_number:
            return entry
        return process_commit_with_pr(entry, https_url, repo_info)


async def find_figma_references(
    file_path: str,
    history_source: HistorySource,
    pr_fetcher: PRFetcher,
    on_result_found: Optional[ResultCallback] = None,
    on_progress: Optional[ProgressCallback] = None,
    chunk_config: Optional[ChunkConfig] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> List[FigmaReferenceResult]:
    """One-shot helper around FigmaReferenceService.find_figma_references."""
    service = FigmaReferenceService(history_source, pr_fetcher, chunk_config)
    return await service.find_figma_references(
        file_path, on_result_found, on_progress, cancel_event
    )
