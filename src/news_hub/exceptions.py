"""
Custom exceptions for the news_hub package.

Provider and cache errors are raised inside their components and contained
there; only configuration errors reach the caller, and only at startup.
"""


class NewsHubError(Exception):
    """Base exception for all news_hub errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(NewsHubError):
    """Raised when required configuration is missing or invalid.

    Fatal at startup. Never raised while serving a request.
    """
    pass


class NoProvidersConfiguredError(ConfigurationError):
    """Raised when an aggregator is built with zero providers."""

    def __init__(self, message: str = "At least one news provider must be registered"):
        super().__init__(message)


class ProviderError(NewsHubError):
    """Raised by a provider when its upstream call or payload is unusable.

    BaseNewsProvider.fetch converts this into a failed ProviderOutcome.
    """

    def __init__(self, provider: str, message: str):
        super().__init__(message, {"provider": provider})
        self.provider = provider


class CacheError(NewsHubError):
    """Raised when the cache backend is unavailable.

    NewsService treats it as a miss and aggregates directly.
    """
    pass
