"""Tests for Figma/Jira URL extraction."""

import pytest

from figma_references.utils.url_detection import (
    extract_urls_from_text,
    find_figma_urls,
    find_jira_urls,
)


class TestFindFigmaUrls:
    """Tests for find_figma_urls function."""

    def test_finds_file_and_design_urls_in_order(self):
        text = (
            "Check out this design: https://figma.com/file/abc123 "
            "and https://figma.com/design/xyz789"
        )
        assert find_figma_urls(text) == [
            "https://figma.com/file/abc123",
            "https://figma.com/design/xyz789",
        ]

    def test_www_subdomain_and_http(self):
        text = "http://www.figma.com/design/KEY/Screen?node-id=1-2"
        assert find_figma_urls(text) == ["http://www.figma.com/design/KEY/Screen?node-id=1-2"]

    def test_case_insensitive_host(self):
        assert find_figma_urls("HTTPS://WWW.FIGMA.COM/file/abc") == [
            "HTTPS://WWW.FIGMA.COM/file/abc"
        ]

    def test_stops_at_whitespace(self):
        text = "Design:\nhttps://figma.com/file/abc\tnext"
        assert find_figma_urls(text) == ["https://figma.com/file/abc"]

    def test_keeps_duplicates(self):
        text = "https://figma.com/file/abc and again https://figma.com/file/abc"
        assert find_figma_urls(text) == [
            "https://figma.com/file/abc",
            "https://figma.com/file/abc",
        ]

    def test_other_paths_do_not_match(self):
        text = "https://figma.com/proto/abc https://figma.com/ https://figma.com/file/"
        assert find_figma_urls(text) == []

    def test_single_url_is_returned_unchanged(self):
        url = "https://www.figma.com/design/abc123/My-File"
        assert find_figma_urls(url) == [url]

    @pytest.mark.parametrize("value", [None, "", 42, ["https://figma.com/file/abc"], "no links"])
    def test_returns_empty_list_for_bad_input(self, value):
        assert find_figma_urls(value) == []


class TestFindJiraUrls:
    """Tests for find_jira_urls function."""

    def test_finds_browse_url(self):
        text = "Related to https://company.atlassian.net/browse/PAY-34584 please review"
        assert find_jira_urls(text) == ["https://company.atlassian.net/browse/PAY-34584"]

    def test_finds_multiple_in_order(self):
        text = "https://a.atlassian.net/browse/AB-1, https://b.atlassian.net/browse/CD-22"
        assert find_jira_urls(text) == [
            "https://a.atlassian.net/browse/AB-1",
            "https://b.atlassian.net/browse/CD-22",
        ]

    def test_lowercase_project_key_does_not_match(self):
        assert find_jira_urls("https://company.atlassian.net/browse/pay-123") == []

    def test_missing_issue_number_does_not_match(self):
        assert find_jira_urls("https://company.atlassian.net/browse/PAY-") == []

    def test_other_hosts_do_not_match(self):
        assert find_jira_urls("https://jira.example.com/browse/PAY-1") == []

    def test_single_url_is_returned_unchanged(self):
        url = "https://company.atlassian.net/browse/PAY-1"
        assert find_jira_urls(url) == [url]

    @pytest.mark.parametrize("value", [None, "", 3.14, "nothing to see"])
    def test_returns_empty_list_for_bad_input(self, value):
        assert find_jira_urls(value) == []


class TestExtractUrlsFromText:
    def test_returns_both_kinds(self):
        body = (
            "Design: https://figma.com/file/abc\n"
            "Ticket: https://company.atlassian.net/browse/PAY-123"
        )
        figma_urls, jira_urls = extract_urls_from_text(body)

        assert figma_urls == ["https://figma.com/file/abc"]
        assert jira_urls == ["https://company.atlassian.net/browse/PAY-123"]

    def test_empty_body(self):
        assert extract_urls_from_text("") == ([], [])
