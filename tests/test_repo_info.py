"""Tests for remote URL helpers."""

import pytest

from figma_references.models import RepositoryInfo
from figma_references.utils.repo_info import convert_ssh_to_https, extract_repository_info


class TestExtractRepositoryInfo:
    def test_strips_git_suffix(self):
        assert extract_repository_info("https://github.com/owner/repo.git") == RepositoryInfo(
            owner="owner", repo="repo"
        )

    def test_plain_https_url(self):
        assert extract_repository_info("https://github.com/acme-corp/recipe-api") == RepositoryInfo(
            owner="acme-corp", repo="recipe-api"
        )

    def test_www_and_http(self):
        assert extract_repository_info("http://www.github.com/owner/repo") == RepositoryInfo(
            owner="owner", repo="repo"
        )

    def test_ignores_extra_path(self):
        info = extract_repository_info("https://github.com/owner/repo/pull/42")
        assert info == RepositoryInfo(owner="owner", repo="repo")

    def test_other_hosts_are_rejected(self):
        assert extract_repository_info("https://gitlab.com/owner/repo") is None

    def test_ssh_url_is_rejected(self):
        assert extract_repository_info("git@github.com:owner/repo.git") is None

    def test_missing_repo_is_rejected(self):
        assert extract_repository_info("https://github.com/owner") is None

    @pytest.mark.parametrize("value", [None, "", 123])
    def test_bad_input(self, value):
        assert extract_repository_info(value) is None


class TestConvertSshToHttps:
    def test_converts_ssh_url(self):
        assert convert_ssh_to_https("git@github.com:owner/repo.git") == "https://github.com/owner/repo"

    def test_https_passes_through(self):
        assert convert_ssh_to_https("https://github.com/owner/repo") == "https://github.com/owner/repo"

    def test_strips_git_suffix_from_https(self):
        assert convert_ssh_to_https("https://github.com/owner/repo.git") == "https://github.com/owner/repo"

    def test_other_ssh_hosts(self):
        assert convert_ssh_to_https("git@gitlab.com:group/project.git") == "https://gitlab.com/group/project"

    def test_idempotent(self):
        once = convert_ssh_to_https("git@github.com:owner/repo.git")
        assert convert_ssh_to_https(once) == once

    def test_https_with_user_info_is_not_treated_as_ssh(self):
        url = "https://user@github.com/owner/repo"
        assert convert_ssh_to_https(url) == url

    @pytest.mark.parametrize("value", [None, "", 7])
    def test_bad_input_returns_empty_string(self, value):
        assert convert_ssh_to_https(value) == ""
