"""Exception types shared across layers.

Scoring failures, provider failures and storage failures are kept separate so
that callers never mistake an error for a legitimately low score.
"""


class InvalidMatchError(ValueError):
    """Match input violates the documented shape (negative score, bad team tag...)."""


class ProviderError(RuntimeError):
    """Generic match source failure."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderRateLimitError(ProviderError):
    """The upstream API kept answering 429 after all retries."""


class ProviderNotFoundError(ProviderError):
    """The requested match does not exist upstream."""


class ProviderConfigError(ProviderError):
    """The match source is not configured (e.g. no API token)."""
