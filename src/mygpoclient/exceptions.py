"""Exception hierarchy for mygpoclient.

All exceptions inherit from :class:`GpodderError` so callers can catch
every library failure with a single ``except`` clause. HTTP status errors
carry the numeric ``status_code`` of the offending response.

Subclass hierarchy::

    GpodderError
    +-- InvalidUsageError       bad caller input (device id, URL, max_results)
    +-- ConfigError             unreadable config / unresolved credential source
    +-- TransportError          connection, TLS or timeout failure
    +-- DeserializationError    body is not JSON or does not match the model
    +-- HTTPStatusError         any non-2xx response
        +-- AuthError           401 / 403
        +-- NotFoundError       404
        +-- ServerError         5xx
"""

from __future__ import annotations


class GpodderError(Exception):
    """Base exception for all mygpoclient errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidUsageError(GpodderError):
    """Raised for invalid arguments, before any request is sent."""


class ConfigError(GpodderError):
    """Raised for configuration problems (invalid JSON, bad credential sources)."""


class TransportError(GpodderError):
    """Raised on network-level failures (timeout, DNS resolution, TLS, connection refused).

    The original :class:`httpx.TransportError` is available as ``__cause__``.
    """


class DeserializationError(GpodderError):
    """Raised when a response body is not JSON or does not match the expected shape."""


class HTTPStatusError(GpodderError):
    """Raised when gpodder.net answers with a non-success status code.

    Args:
        message: Human-readable error description.
        status_code: The HTTP status code of the response.
    """

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class AuthError(HTTPStatusError):
    """Raised on HTTP 401 / 403 (wrong credentials or foreign device)."""


class NotFoundError(HTTPStatusError):
    """Raised when the service returns HTTP 404 (unknown user or device)."""


class ServerError(HTTPStatusError):
    """Raised when the service returns an HTTP 5xx server error."""
