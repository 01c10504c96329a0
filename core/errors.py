# =============================================================================
# core/errors.py  —  Error taxonomy
# =============================================================================
#
# Three kinds of failure leave the core:
#
#   ValidationError      bad input for ONE operation (missing field, end date
#                        not after start date, unknown currency pair).
#   ProviderError        an upstream data source answered badly (non-2xx,
#                        timeout, malformed payload).  Carries the provider
#                        name and the upstream message.
#
# Missing API keys are NOT an error: the provider factory picks the mock
# implementation instead (see core/providers.py).
# =============================================================================


class TravelError(Exception):
    """Base class for every error raised on purpose by the core."""


class ValidationError(TravelError):
    """Raised when a request cannot be served because its input is invalid."""


class RateUnavailableError(ValidationError):
    """Raised when no exchange rate exists for a currency pair."""

    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(
            f"Exchange rate not available for {from_currency} to {to_currency}"
        )


class ProviderError(TravelError):
    """Raised when an upstream provider call fails."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"{provider}: {message}")
