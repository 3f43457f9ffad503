# File: tests/test_urls.py
import pytest

from site_mirror.crawler.models import CrawlTarget, NormalizedURL
from site_mirror.crawler.urls import in_scope, is_directory_url, normalize_url

PAGE = NormalizedURL("https", "github.com", "/features")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://github.com/features/", NormalizedURL("https", "github.com", "/features")),
        ("https://github.com/features/a?tab=1#x", NormalizedURL("https", "github.com", "/features/a")),
        ("HTTPS://GitHub.com/features", NormalizedURL("https", "github.com", "/features")),
        ("https://github.com", NormalizedURL("https", "github.com", "")),
        ("https://github.com/", NormalizedURL("https", "github.com", "")),
        ("http://localhost:8080/docs//", NormalizedURL("http", "localhost:8080", "/docs")),
    ],
)
def test_normalize_absolute(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["#top", "#", "", "   ", "/", "ftp://github.com/file", "relative/path", "http://", "https:///nohost"],
)
def test_normalize_discards_without_base(raw):
    assert normalize_url(raw) is None


def test_root_relative_takes_base_host():
    url = normalize_url("/features/a/?q=1", PAGE)
    assert url == NormalizedURL("https", "github.com", "/features/a")


def test_cross_domain_is_discarded():
    assert normalize_url("https://other.com/features/x", PAGE) is None
    assert normalize_url("//other.com/features/x", PAGE) is None


def test_network_path_reference_same_host():
    assert normalize_url("//github.com/features/b/", PAGE) == NormalizedURL("https", "github.com", "/features/b")


def test_bare_relative_is_resolved_against_page():
    page = NormalizedURL("https", "github.com", "/features/a")
    assert normalize_url("b", page) == NormalizedURL("https", "github.com", "/features/b")
    assert normalize_url("../blog", page) == NormalizedURL("https", "github.com", "/blog")


@pytest.mark.parametrize("raw", ["mailto:me@github.com", "javascript:void(0)", "tel:+123"])
def test_non_http_references_are_discarded(raw):
    assert normalize_url(raw, PAGE) is None


def test_crawl_target_is_accepted_as_base():
    target = CrawlTarget.from_url("https://github.com/features")
    assert normalize_url("/features/x", target) == NormalizedURL("https", "github.com", "/features/x")


def test_non_string_input_is_discarded():
    assert normalize_url(None) is None  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "raw",
    [
        "https://github.com/features/",
        "https://github.com/features/a?x=1#frag",
        "http://Example.COM//docs///",
        "https://github.com",
        "https://github.com/a%20b/",
    ],
)
def test_normalization_is_idempotent(raw):
    once = normalize_url(raw)
    assert once is not None
    assert normalize_url(str(once)) == once
    assert normalize_url(once.key) == once


def test_key_format():
    assert NormalizedURL("https", "github.com", "/features").key == "https://github.com/features"
    assert str(NormalizedURL("https", "github.com", "")) == "https://github.com"


@pytest.mark.parametrize(
    "candidate,scope,expected",
    [
        ("/features/x", "/features", True),
        ("/features", "/features", True),
        ("/featuresX", "/features", False),
        ("/apidocs", "/api", False),
        ("/api/v1/users", "/api", True),
        ("/blog", "/features", False),
        ("", "", True),
        ("/anything", "", True),
        ("/features", "/features/x", False),
    ],
)
def test_in_scope(candidate, scope, expected):
    assert in_scope(candidate, scope) is expected


def test_target_from_url():
    target = CrawlTarget.from_url("https://GitHub.com/features/?x=1")
    assert target == CrawlTarget("https", "github.com", "/features")
    assert target.seed == NormalizedURL("https", "github.com", "/features")


@pytest.mark.parametrize("raw", ["github.com/features", "ftp://github.com", "http://", "httpx://host/a"])
def test_target_rejects_bad_seed(raw):
    from site_mirror.errors import ParseError

    with pytest.raises(ParseError):
        CrawlTarget.from_url(raw)


def test_target_contains_checks_host_and_path():
    target = CrawlTarget.from_url("https://github.com/features")
    assert target.contains(NormalizedURL("https", "github.com", "/features/a"))
    assert not target.contains(NormalizedURL("https", "gitlab.com", "/features/a"))
    assert not target.contains(NormalizedURL("https", "github.com", "/featuresX"))


@pytest.mark.parametrize(
    "raw,path",
    [
        ("/docs/../blog", "/blog"),
        ("/docs/./a", "/docs/a"),
        ("/docs/a/../b/", "/docs/b"),
        ("/../../etc", "/etc"),
        ("/docs/..", ""),
        ("https://github.com/features/x/../../blog", "/blog"),
        ("https://github.com/features/./a/.", "/features/a"),
    ],
)
def test_dot_segments_are_resolved(raw, path):
    url = normalize_url(raw, PAGE)
    assert url == NormalizedURL("https", "github.com", path)
    assert normalize_url(url.key) == url


def test_dot_segments_do_not_fool_the_scope_check(features_target):
    escaped = normalize_url("/features/../blog", features_target)
    assert not features_target.contains(escaped)
    assert normalize_url("/features/./a", features_target) == normalize_url("/features/a", features_target)


def test_page_url_with_trailing_slash_is_a_directory():
    assert normalize_url("a", "https://github.com/features/") == NormalizedURL("https", "github.com", "/features/a")
    assert normalize_url("a", "https://github.com/features") == NormalizedURL("https", "github.com", "/a")
    assert normalize_url("a", "https://github.com/features/#top") == NormalizedURL("https", "github.com", "/features/a")


def test_page_url_base_still_checks_host():
    assert normalize_url("https://other.com/features/a", "https://github.com/features/") is None
    assert normalize_url("a", "not a url") is None


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://github.com/features/", True),
        ("https://github.com/features/?tab=1", True),
        ("https://github.com/features", False),
        ("https://github.com/", False),
        ("https://github.com", False),
    ],
)
def test_is_directory_url(raw, expected):
    assert is_directory_url(raw) is expected


def test_request_url_restores_directory_slash():
    url = NormalizedURL("https", "github.com", "/features")
    assert url.request_url() == "https://github.com/features"
    assert url.request_url(directory=True) == "https://github.com/features/"
    assert NormalizedURL("https", "github.com", "").request_url(directory=True) == "https://github.com"


def test_target_scope_has_dot_segments_resolved():
    target = CrawlTarget.from_url("https://github.com/features/./x/..")
    assert target.scope_path == "/features"
    assert target.seed == NormalizedURL("https", "github.com", "/features")
