from typing import List, Optional, Tuple


class AnalysisError(Exception):
    """Base class for failures that end a single analysis request."""

    error_type = "Failed to analyze website"

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or message


class BrowserUnavailable(AnalysisError):
    """The browser process could not be launched or no page could be opened."""

    error_type = "Browser Unavailable"


class NavigationFailed(AnalysisError):
    """Every load strategy failed for the target URL."""

    error_type = "Navigation Failed"

    def __init__(self, url: str, attempts: Optional[List[Tuple[str, str]]] = None):
        self.url = url
        self.attempts = list(attempts or [])
        message = (
            f"Unable to load {url}. The site may be blocking automated access, "
            "experiencing issues, or taking too long to respond."
        )
        detail = "; ".join(f"{strategy}: {error}" for strategy, error in self.attempts)
        super().__init__(message, detail or message)


class ExtractionFailure(AnalysisError):
    """An extractor (or the snapshot step) could not complete."""

    error_type = "Extraction Failure"

    def __init__(self, extractor: str, reason: str):
        self.extractor = extractor
        self.reason = reason
        super().__init__(f"{extractor} extraction failed: {reason}", reason)


def describe_error(exc: Exception) -> Tuple[str, str]:
    """
    Map a failure to an end-user error label and message.

    Args:
        exc: The exception raised by the pipeline

    Returns:
        Tuple of (error type, user-facing message)
    """
    if isinstance(exc, AnalysisError):
        text = f"{exc.message} {exc.detail}"
        error_type, message = exc.error_type, exc.message
    else:
        text = str(exc)
        error_type, message = AnalysisError.error_type, str(exc)

    if "timeout" in text.lower():
        return (
            "Timeout Error",
            "The website took too long to respond. This could be due to: slow server "
            "response, heavy page content, or network issues. Try again or test a "
            "different URL.",
        )
    if "net::ERR_NAME_NOT_RESOLVED" in text:
        return (
            "DNS Error",
            "Could not resolve the domain name. Please check the URL and try again.",
        )
    if "net::ERR_CONNECTION_REFUSED" in text:
        return (
            "Connection Refused",
            "The server refused the connection. The website might be down or "
            "blocking requests.",
        )
    if "net::ERR_CERT" in text:
        return (
            "SSL Certificate Error",
            "SSL certificate issue detected. The website may have an invalid or "
            "expired certificate.",
        )

    return error_type, message
