"""Error types raised along the estimation pipeline.

Each class maps to one way a request can go wrong; the API layer turns them
into HTTP responses.
"""


class SiteCarbonError(Exception):
    """Base class for all service errors."""


class URLValidationError(SiteCarbonError):
    """The ``url`` parameter is missing or not an absolute http(s) URL."""


class FetchError(SiteCarbonError):
    """The resource could not be retrieved (network, timeout, redirects, status)."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class CollaboratorError(SiteCarbonError):
    """An external collaborator (LLM completion, browser audit) failed."""

    def __init__(self, collaborator: str, message: str):
        super().__init__(message)
        self.collaborator = collaborator


class ConfigurationError(SiteCarbonError, ValueError):
    """A model coefficient, projection constant or threshold is invalid."""
