"""Errors raised when talking to the research API."""


class ResearchAPIError(Exception):
    """Base class for research API failures."""


class ResearchAPIConnectionError(ResearchAPIError):
    """The request never got a response (DNS, refused connection, timeout)."""


class ResearchAPIStatusError(ResearchAPIError):
    """The API answered with a non-2xx status."""

    def __init__(self, url, status, body=""):
        self.url = url
        self.status = status
        self.body = body
        super().__init__(f"{url} returned HTTP {status}: {body[:200]}")


class ResearchAPIResponseError(ResearchAPIError):
    """The API answered but the body was not valid JSON."""
