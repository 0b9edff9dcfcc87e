"""Git history source for Figma References."""

import asyncio
import logging
import os
import subprocess
from typing import List

from figma_references.config import DEFAULT_GIT_TIMEOUT_SECONDS
from figma_references.git_log import GIT_LOG_FORMAT, parse_git_log_output
from figma_references.models import GitCommit

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git history cannot be read."""
    pass


class GitHistorySource:
    """Reads commit history and the origin remote for files in a git working copy."""

    def __init__(self, timeout_seconds: int = DEFAULT_GIT_TIMEOUT_SECONDS):
        """Initialize the history source.

        Args:
            timeout_seconds: Maximum time to wait for each git command.
        """
        self._timeout = timeout_seconds

    def _run_git(self, args: List[str], cwd: str) -> str:
        """Run a git command and return its stdout.

        Raises:
            GitError: If git exits non-zero, times out, or is not installed.
        """
        cmd = ["git", *args]
        logger.debug(f"Running {' '.join(cmd)} in {cwd}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise GitError(f"git {args[0]} timed out after {self._timeout} seconds") from e
        except OSError as e:
            raise GitError(f"Could not run git: {e}") from e

        if result.returncode != 0:
            error_msg = (result.stderr or result.stdout or "Unknown error").strip()
            raise GitError(f"git {args[0]} failed: {error_msg}")

        return result.stdout

    def find_working_copy(self, file_path: str) -> str:
        """Get the top-level directory of the working copy containing a file.

        Raises:
            GitError: If the file is not inside a git working copy.
        """
        directory = os.path.dirname(os.path.abspath(file_path))
        if not os.path.isdir(directory):
            raise GitError(f"File is not in a git working copy: {file_path}")

        try:
            output = self._run_git(["rev-parse", "--show-toplevel"], cwd=directory)
        except GitError as e:
            raise GitError(f"File is not in a git working copy: {file_path}") from e
        return output.strip()

    def read_git_log(self, file_path: str, cwd: str) -> str:
        """Run git log for a single file, following renames."""
        return self._run_git(
            [
                "log",
                f"--pretty=format:{GIT_LOG_FORMAT}",
                "--date=short",
                "--follow",
                "--",
                os.path.abspath(file_path),
            ],
            cwd=cwd,
        )

    def read_remote_url(self, cwd: str) -> str:
        """Get the origin remote URL, or an empty string if there is none."""
        try:
            return self._run_git(["config", "--get", "remote.origin.url"], cwd=cwd).strip()
        except GitError as e:
            logger.debug(f"No origin remote for {cwd}: {e}")
            return ""

    def get_history_sync(self, file_path: str) -> List[GitCommit]:
        """Get the commits touching a file, newest first.

        Commits come back as parsed; PR numbers and URLs are attached by the
        reference service, which reads the remote once per search.

        Raises:
            GitError: If the file is outside a working copy or git fails.
        """
        cwd = self.find_working_copy(file_path)
        output = self.read_git_log(file_path, cwd)
        if not output.strip():
            return []

        commits = parse_git_log_output(output)
        logger.info(f"Found {len(commits)} commit(s) for {file_path}")
        return commits

    def get_remote_url_sync(self, file_path: str) -> str:
        """Get the origin remote URL for the working copy containing a file."""
        try:
            cwd = self.find_working_copy(file_path)
        except GitError:
            return ""
        return self.read_remote_url(cwd)

    async def get_history(self, file_path: str) -> List[GitCommit]:
        return await asyncio.to_thread(self.get_history_sync, file_path)

    async def get_remote_url(self, file_path: str) -> str:
        return await asyncio.to_thread(self.get_remote_url_sync, file_path)
