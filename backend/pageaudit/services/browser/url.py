from urllib.parse import urlsplit, urlunsplit

SECURE_SCHEME = "https"
SECURE_PREFIX = f"{SECURE_SCHEME}://"


def normalize_url(value: str) -> str:
    """
    Turn arbitrary user input into an absolute https URL.

    Input that parses as an absolute URL keeps its host, path, query and
    fragment with the scheme forced to https. Anything else is prefixed
    with ``https://``. Never raises.

    Args:
        value: URL or bare host typed by the user

    Returns:
        Absolute URL string starting with ``https://``
    """
    candidate = str(value or "").strip()

    if candidate.startswith("//"):
        candidate = f"{SECURE_SCHEME}:{candidate}"

    try:
        parsed = urlsplit(candidate)
        # Accessing port validates it and raises ValueError when malformed
        parsed.port
    except ValueError:
        return SECURE_PREFIX + candidate

    if not parsed.scheme or not parsed.netloc:
        return SECURE_PREFIX + candidate

    netloc = parsed.netloc if "@" in parsed.netloc else parsed.netloc.lower()
    return urlunsplit(
        (SECURE_SCHEME, netloc, parsed.path or "/", parsed.query, parsed.fragment)
    )
