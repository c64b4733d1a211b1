from pageaudit.core.errors import (
    BrowserUnavailable,
    ExtractionFailure,
    NavigationFailed,
    describe_error,
)


def test_navigation_failed_carries_url_and_attempts():
    error = NavigationFailed("https://a.example/", [("networkidle", "boom"), ("load", "bang")])

    assert error.url == "https://a.example/"
    assert "Unable to load https://a.example/" in str(error)
    assert error.detail == "networkidle: boom; load: bang"


def test_describe_connection_refused():
    error = NavigationFailed("https://a.example/", [("load", "net::ERR_CONNECTION_REFUSED")])

    assert describe_error(error)[0] == "Connection Refused"


def test_describe_certificate_error():
    error = NavigationFailed("https://a.example/", [("load", "net::ERR_CERT_DATE_INVALID")])

    assert describe_error(error)[0] == "SSL Certificate Error"


def test_describe_falls_back_to_error_kind():
    assert describe_error(BrowserUnavailable("Unable to start", "no chromium")) == (
        "Browser Unavailable",
        "Unable to start",
    )
    assert describe_error(ExtractionFailure("snapshot", "Target closed"))[0] == (
        "Extraction Failure"
    )
    assert describe_error(ValueError("odd")) == ("Failed to analyze website", "odd")
