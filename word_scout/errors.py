"""Exceptions raised by WordScout.

Per-URL failures are caught by the spider and recorded as ``errored`` in
the URL store; everything raised while building a crawl (HTTP session,
rate limiter, state file) reaches the caller.
"""


class WordScoutError(Exception):
    """Base class for all WordScout errors."""


class FetchError(WordScoutError):
    """Raised when an HTTP fetch fails due to network/transport errors or an error status."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"request error for {url}: {original}")


class UrlParseError(WordScoutError, ValueError):
    """Raised when a value cannot be used as an absolute URL."""

    def __init__(self, value: str, reason: str = "not an absolute url"):
        self.value = value
        self.reason = reason
        super().__init__(f"url parsing error for '{value}': {reason}")


class RateLimitError(WordScoutError):
    """Raised when the token bucket cannot be built."""


class StateFileError(WordScoutError):
    """Raised when a crawl state file cannot be read, parsed or written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"state file '{path}': {reason}")


class HeaderFormatError(WordScoutError, ValueError):
    """Raised when a value cannot be sent as an HTTP header."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        super().__init__(f"invalid value for header {name}: {value!r}")


class BlankStringError(WordScoutError, ValueError):
    """Raised for empty strings or strings with leading/trailing whitespace."""

    def __init__(self, value: str = ""):
        self.value = value
        super().__init__(
            "value cannot have leading/trailing whitespace, nor consist of only whitespace"
        )


class EarlyTermination(WordScoutError):
    """Cooperative shutdown won a race; not a failure and never stored as one."""

    def __init__(self) -> None:
        super().__init__("terminating early")


__all__ = [
    "WordScoutError",
    "FetchError",
    "UrlParseError",
    "RateLimitError",
    "StateFileError",
    "HeaderFormatError",
    "BlankStringError",
    "EarlyTermination",
]
