"""Errors raised while forwarding a webmention.

Only the request router turns these into HTTP responses: ValidationError
becomes 400, everything else becomes a generic 500.
"""


class ForwarderError(Exception):
    """Base class for webmention forwarding failures."""

    pass


class ValidationError(ForwarderError):
    """Raised when a webmention lacks source or target."""

    pass


class ConfigError(ForwarderError):
    """Raised when required forwarding configuration is missing."""

    pass


class CredentialError(ForwarderError):
    """Raised when the GitHub credential file is missing or empty."""

    pass


class RemoteApiError(ForwarderError):
    """Raised when the GitHub API call fails.

    ``status_code`` is None for transport failures (connection error,
    timeout) and for 2xx responses whose body could not be parsed.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UnexpectedError(ForwarderError):
    """Wraps any non-forwarder exception caught at the router boundary."""

    pass
