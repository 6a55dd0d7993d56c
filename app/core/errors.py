"""
Application errors for clean API error handling.

Services raise a GatewayError subclass; the API layer renders it as
{"error": message} with the error's status_code. None of these are retried.
"""


class GatewayError(Exception):
    """Base for every failure the search gateway reports to its caller."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(GatewayError):
    """Raised when the query is missing or blank. Client-caused."""

    status_code = 400


class ConfigurationError(GatewayError):
    """Raised when provider credentials are missing from the environment. Operator-caused."""

    status_code = 500


class ProviderError(GatewayError):
    """Raised when the search provider answers with a non-success status; the status is forwarded."""


class TransportError(GatewayError):
    """Raised when the provider call cannot complete (network failure, unparseable body)."""

    status_code = 500
