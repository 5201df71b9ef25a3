"""Authenticated request executor.

:class:`AuthenticatedSession` wraps :class:`httpx.Client` and attaches the
same two headers to every outgoing request:

- ``Authorization: Basic ...`` built from the held
  :class:`~mygpoclient.auth.Credentials`.
- ``User-Agent: mygpoclient/<version>``.

It exposes exactly four verbs (:meth:`~AuthenticatedSession.get`,
:meth:`~AuthenticatedSession.get_with_query`, :meth:`~AuthenticatedSession.put`
and :meth:`~AuthenticatedSession.post`). Each call issues one request and
returns the :class:`httpx.Response` untouched: there is no retry, no cache
and no status interpretation here. Resource modules decide what a status
code means via :mod:`mygpoclient.client.response`.

Credentials are read-only after construction, so a session may be shared
between threads; :class:`httpx.Client` pools connections safely.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import httpx

from mygpoclient import __version__
from mygpoclient.auth import Credentials, basic_auth_header
from mygpoclient.exceptions import TransportError
from mygpoclient.models import ClientConfig
from mygpoclient.output import debug

USER_AGENT = f"mygpoclient/{__version__}"

QueryParams = Sequence[tuple[str, Any]]


class AuthenticatedSession:
    """Execute authenticated requests against gpodder.net.

    Args:
        credentials: The user name and password sent with every request.
        config: Base URL, timeout and TLS settings. Defaults to
            :class:`~mygpoclient.models.ClientConfig` defaults.
        transport: Optional :class:`httpx.BaseTransport`, e.g. an
            :class:`httpx.MockTransport` in tests.

    Example::

        with AuthenticatedSession(Credentials.of("alice", "secret")) as session:
            response = session.get("/api/2/devices/alice.json")
    """

    def __init__(
        self,
        credentials: Credentials,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._credentials = credentials
        self._config = config or ClientConfig()
        self._headers: dict[str, str] = {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
            **basic_auth_header(credentials),
        }
        self._client = httpx.Client(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            transport=transport,
        )

    @property
    def username(self) -> str:
        """The authenticated user's name, used in most resource paths."""
        return self._credentials.username

    @property
    def config(self) -> ClientConfig:
        """The connection settings this session was created with."""
        return self._config

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> AuthenticatedSession:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    # ------------------------------------------------------------------ #
    # Verbs
    # ------------------------------------------------------------------ #

    def get(self, path: str) -> httpx.Response:
        """Send a GET request without query parameters.

        Args:
            path: URL path appended to the configured ``base_url``.

        Returns:
            The :class:`httpx.Response`, whatever its status.
        """
        return self._send("GET", path)

    def get_with_query(self, path: str, query_params: QueryParams) -> httpx.Response:
        """Send a GET request with a query string.

        Pairs are encoded in the order given. Duplicates are kept.

        Args:
            path: URL path appended to the configured ``base_url``.
            query_params: Ordered ``(key, value)`` pairs.

        Returns:
            The :class:`httpx.Response`, whatever its status.
        """
        return self._send("GET", path, params=list(query_params))

    def put(self, path: str, body: Any) -> httpx.Response:
        """Send a PUT request with *body* serialised as JSON."""
        return self._send("PUT", path, json=body)

    def post(self, path: str, body: Any) -> httpx.Response:
        """Send a POST request with *body* serialised as JSON."""
        return self._send("POST", path, json=body)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Issue exactly one request and wrap transport failures."""
        debug(f"{method} {path}")
        try:
            response = self._client.request(method, path, headers=self._headers, **kwargs)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        debug(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())
        return response
