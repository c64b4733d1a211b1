import pytest

from pageaudit.services.browser.url import normalize_url


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("http://example.com", "https://example.com/"),
        ("https://Example.COM/path?q=1#top", "https://example.com/path?q=1#top"),
        ("example.com", "https://example.com"),
        ("  example.com/about  ", "https://example.com/about"),
        ("//cdn.example.com/x", "https://cdn.example.com/x"),
        ("localhost:3000", "https://localhost:3000"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize(
    "raw", ["", "not a url at all", "http://[::1", "http://host:notaport/", "mailto:x@y.z"]
)
def test_normalize_url_never_raises_and_is_https(raw):
    assert normalize_url(raw).startswith("https://")


def test_normalize_url_handles_none():
    assert normalize_url(None) == "https://"
