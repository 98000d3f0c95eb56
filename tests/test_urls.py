from __future__ import annotations

import pytest

from seo_crawler.urls import extract_domain, is_internal, normalize_url, should_exclude


class TestShouldExclude:
    def test_pdf_is_excluded(self) -> None:
        assert should_exclude("https://x.com/a.pdf") is True

    def test_query_string_is_excluded(self) -> None:
        assert should_exclude("https://x.com/a.html?x=1") is True

    def test_html_page_is_kept(self) -> None:
        assert should_exclude("https://x.com/a.html") is False

    @pytest.mark.parametrize("path", ["/photo.JPG", "/archive.tar.gz", "/clip.mp4", "/deck.pptx"])
    def test_extension_match_is_case_insensitive(self, path: str) -> None:
        assert should_exclude(f"https://x.com{path}") is True

    def test_extension_only_checked_on_path(self) -> None:
        assert should_exclude("https://pdf.example.com/about") is False

    def test_unparseable_url_fails_closed(self) -> None:
        assert should_exclude("http://[::1") is True


class TestNormalizeUrl:
    def test_strips_fragment(self) -> None:
        assert normalize_url("https://ex.com/", "/a#top") == "https://ex.com/a"

    def test_fragment_variants_share_one_canonical_form(self) -> None:
        a = normalize_url("https://ex.com/", "https://ex.com/page#one")
        b = normalize_url("https://ex.com/", "https://ex.com/page#two")
        assert a == b == "https://ex.com/page"

    def test_resolves_relative_against_base(self) -> None:
        assert normalize_url("https://ex.com/blog/post", "other") == "https://ex.com/blog/other"

    def test_adds_root_path(self) -> None:
        assert normalize_url("https://ex.com", "https://ex.com") == "https://ex.com/"

    def test_excluded_url_returns_none(self) -> None:
        assert normalize_url("https://ex.com/", "/img.png") is None
        assert normalize_url("https://ex.com/", "/search?q=seo") is None

    def test_non_http_scheme_returns_none(self) -> None:
        assert normalize_url("https://ex.com/", "mailto:me@ex.com") is None

    def test_empty_returns_none(self) -> None:
        assert normalize_url("https://ex.com/", "") is None

    @pytest.mark.parametrize(
        "raw",
        ["/a", "a/b/../c", "https://ex.com", "https://EX.com/Path#frag", "//cdn.ex.com/x.html"],
    )
    def test_idempotent(self, raw: str) -> None:
        base = "https://ex.com/dir/"
        once = normalize_url(base, raw)
        assert once is not None
        assert normalize_url(base, once) == once


class TestDomain:
    def test_extract_domain_lowercases(self) -> None:
        assert extract_domain("https://WWW.Ex.com:8080/a") == "www.ex.com"

    def test_extract_domain_without_host(self) -> None:
        assert extract_domain("not a url") is None

    def test_is_internal(self) -> None:
        assert is_internal("https://ex.com/a", "ex.com") is True
        assert is_internal("https://other.com/", "ex.com") is False
