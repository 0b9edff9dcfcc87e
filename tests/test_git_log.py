"""Tests for git log parsing and PR correlation."""

import pytest

from figma_references.git_log import (
    extract_pr_number,
    parse_git_log_line,
    parse_git_log_output,
    process_commit_with_pr,
)
from figma_references.models import CommitWithPR, GitCommit, PRDetails, RepositoryInfo

HASH = "0123456789abcdef0123456789abcdef01234567"
REPO_URL = "https://github.com/acme-corp/recipe-api"
REPO_INFO = RepositoryInfo(owner="acme-corp", repo="recipe-api")


class TestParseGitLogLine:
    def test_parses_all_fields(self):
        commit = parse_git_log_line(f"{HASH}|John Doe|2023-01-01|feat: add new feature (#123)")

        assert commit == GitCommit(
            hash=HASH,
            short_hash="0123456",
            author="John Doe",
            date="2023-01-01",
            message="feat: add new feature (#123)",
        )

    def test_short_hash_of_short_input(self):
        commit = parse_git_log_line("abc|Jane|2023-01-01|msg")
        assert commit.short_hash == "abc"

    def test_missing_fields_are_empty_strings(self):
        commit = parse_git_log_line(f"{HASH}|John Doe")

        assert commit.author == "John Doe"
        assert commit.date == ""
        assert commit.message == ""

    def test_empty_line(self):
        assert parse_git_log_line("") == GitCommit()

    def test_message_with_separator_round_trips(self):
        line = f"{HASH}|Jane|2024-02-03|fix: a | b in table (#9)"
        commit = parse_git_log_line(line)

        assert commit.message == "fix: a | b in table (#9)"
        assert "|".join([commit.hash, commit.author, commit.date, commit.message]) == line


class TestParseGitLogOutput:
    def test_skips_blank_lines(self):
        output = "a1|A|2023-01-01|one\n\nb2|B|2023-01-02|two\n"
        commits = parse_git_log_output(output)

        assert [c.hash for c in commits] == ["a1", "b2"]

    def test_empty_output(self):
        assert parse_git_log_output("") == []


class TestExtractPrNumber:
    def test_squash_merge_suffix(self):
        assert extract_pr_number("feat: add (#123)") == "123"

    def test_first_reference_wins(self):
        assert extract_pr_number("Merge #12 into #34") == "12"

    def test_returns_none_without_reference(self):
        assert extract_pr_number("fix: handle # signs and numbers 42") is None

    @pytest.mark.parametrize("value", [None, "", 5])
    def test_returns_none_for_bad_input(self, value):
        assert extract_pr_number(value) is None


class TestProcessCommitWithPr:
    def test_adds_pr_fields(self):
        commit = parse_git_log_line(f"{HASH}|John|2023-01-01|feat: thing (#42)")

        enriched = process_commit_with_pr(commit, REPO_URL, REPO_INFO)

        assert isinstance(enriched, CommitWithPR)
        assert enriched.pr_number == "42"
        assert enriched.pr_url == f"{REPO_URL}/pull/42"
        assert enriched.pr_details is None
        assert enriched.author == "John"

    def test_pr_url_built_without_repo_info(self):
        commit = parse_git_log_line("abc|John|2023-01-01|feat (#7)")

        enriched = process_commit_with_pr(commit, "https://gitlab.com/g/p", None)

        assert enriched.pr_url == "https://gitlab.com/g/p/pull/7"

    def test_attaches_details_when_given(self):
        commit = parse_git_log_line("abc|John|2023-01-01|feat (#7)")
        details = PRDetails(title="Feat", body="body")

        enriched = process_commit_with_pr(commit, REPO_URL, REPO_INFO, details)

        assert enriched.pr_details is details

    def test_no_pr_fields_without_reference(self):
        commit = parse_git_log_line("abc|John|2023-01-01|chore: tidy")
        details = PRDetails(title="ignored")

        enriched = process_commit_with_pr(commit, REPO_URL, REPO_INFO, details)

        assert enriched.pr_number is None
        assert enriched.pr_url is None
        assert enriched.pr_details is None

    def test_input_commit_is_not_modified(self):
        commit = parse_git_log_line("abc|John|2023-01-01|feat (#7)")

        process_commit_with_pr(commit, REPO_URL, REPO_INFO)

        assert not hasattr(commit, "pr_number")
