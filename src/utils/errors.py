"""Custom exception hierarchy for rendezvous.

All application exceptions inherit from :class:`RendezvousError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "ticketmaster") caused the failure.

The hierarchy is split between caller mistakes and collaborator failures:

    RendezvousError  (base -- catch-all for any rendezvous error)
    +-- PickParseError           (malformed tagged pick text)
    +-- InvalidPickError         (inconsistent pick/slot wiring)
    +-- ConfigurationError       (startup / missing config)
    +-- ProviderUnavailableError (external service down / unreachable)
    +-- RateLimitError           (provider rate-limit exceeded)

The matching engine itself only ever raises the first two.  Provider and
network failures never reach it as exceptions -- the provider adapter turns
them into :class:`~src.interfaces.event_provider.FetchErr` values and the
engine sees an empty event pool for that pick.
"""


class RendezvousError(Exception):
    """Base exception for all rendezvous errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  ``__str__`` prefixes the provider name in brackets for log
    scanning, e.g. ``[ticketmaster] Rate limit exceeded``.
    """

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
# Programmer errors (raised by the engine)
# ---------------------------------------------------------------------------

class PickParseError(RendezvousError):
    """Raised when tagged pick text (``team:...``, ``artist:...``) is malformed."""

    def __init__(
        self,
        message: str = "Malformed pick text",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class InvalidPickError(RendezvousError):
    """Raised for inconsistent picks: duplicate slots, unknown pool slots,
    or re-resolving a pick to a different canonical id."""

    def __init__(
        self,
        message: str = "Invalid pick",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class ProviderUnavailableError(RendezvousError):
    """Raised when an external service or provider is unreachable.

    The event provider catches this internally and reports a ``FetchErr``;
    the resolver and catalog let it propagate to the search service.
    """

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RateLimitError(RendezvousError):
    """Raised when an API rate limit is exceeded after all retries."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(RendezvousError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
