"""Custom exception hierarchy for the image discovery engine.

All application exceptions inherit from :class:`ImageDiscoveryError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "perplexity", "dall-e") caused the failure.

Every class also declares a stable ``code`` (the value surfaced to API
callers) and a ``retryable`` hint:

    ImageDiscoveryError     INTERNAL_ERROR       (base -- catch-all)
    +-- InvalidRequestError VALIDATION_ERROR     (missing/malformed request fields)
    +-- ConfigurationError  CONFIGURATION_ERROR  (provider credentials absent)
    +-- ProviderError       PROVIDER_MISS        (one provider call failed)
    |   +-- RateLimitError  PROVIDER_MISS        (provider rate-limit exceeded)
    +-- NoSuitableImagesError NO_SUITABLE_IMAGES (all search levels exhausted)
    +-- SearchCancelledError  CANCELLED          (caller cancelled mid-flight)

``ProviderError`` never reaches a caller: the escalation controller absorbs
it and moves on to the next search level.  Validation and configuration
errors are raised before any network activity.
"""


class ImageDiscoveryError(Exception):
    """Base exception for all image discovery errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[perplexity] Rate limit exceeded``.
    """

    code: str = "INTERNAL_ERROR"
    retryable: bool = False

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Fail-fast errors (raised before any provider call)
# ---------------------------------------------------------------------------

class InvalidRequestError(ImageDiscoveryError):
    """Raised when required request fields are missing or malformed."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Invalid image search request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(ImageDiscoveryError):
    """Raised when provider credentials or other configuration are missing."""

    code = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class ProviderError(ImageDiscoveryError):
    """Raised when a search or generation provider call fails.

    The escalation controller catches this and treats the current search
    level as a miss.  It is never reported to the caller.
    """

    code = "PROVIDER_MISS"
    retryable = True

    def __init__(
        self,
        message: str = "Provider call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RateLimitError(ProviderError):
    """Raised when a provider rejects the call for exceeding its rate limit.

    Back-off is the provider client's concern; the engine only forfeits the
    level that hit the limit.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Terminal escalation errors
# ---------------------------------------------------------------------------

class NoSuitableImagesError(ImageDiscoveryError):
    """Raised when every search level is exhausted without a result.

    Callers should present this as "no image could be found or generated
    for this content".  A retry may hit a different provider response.
    """

    code = "NO_SUITABLE_IMAGES"
    retryable = True

    def __init__(
        self,
        message: str = "No images found meeting quality threshold across all search levels",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class SearchCancelledError(ImageDiscoveryError):
    """Raised when the caller's cancellation signal fires mid-escalation."""

    code = "CANCELLED"
    retryable = True

    def __init__(
        self,
        message: str = "Image search was cancelled",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
