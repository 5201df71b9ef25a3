"""User-scoped client.

:class:`UserClient` owns an :class:`~mygpoclient.client.session.AuthenticatedSession`
and exposes the operations that apply across all of a user's devices.
Device-scoped operations live on :class:`~mygpoclient.client.device.DeviceClient`,
obtained through :meth:`UserClient.device`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import httpx

from mygpoclient import device as device_api
from mygpoclient import subscription as subscription_api
from mygpoclient import suggestion as suggestion_api
from mygpoclient.auth import Credentials
from mygpoclient.client.session import AuthenticatedSession, QueryParams
from mygpoclient.models import ClientConfig

if TYPE_CHECKING:
    from mygpoclient.client.device import DeviceClient


class UserClient:
    """Client for user-scoped gpodder.net operations.

    Args:
        username: gpodder.net user name.
        password: gpodder.net password.
        config: Optional connection settings.
        transport: Optional :class:`httpx.BaseTransport` (tests).

    Example::

        with UserClient("alice", "secret") as client:
            devices = client.list_devices()
    """

    def __init__(
        self,
        username: str,
        password: str,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._session = AuthenticatedSession(
            Credentials.of(username, password), config=config, transport=transport
        )

    @property
    def session(self) -> AuthenticatedSession:
        return self._session

    @property
    def username(self) -> str:
        return self._session.username

    def device(self, device_id: str) -> DeviceClient:
        """Return a :class:`DeviceClient` for *device_id* sharing this session."""
        from mygpoclient.client.device import DeviceClient

        return DeviceClient(self, device_id)

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> UserClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------ #
    # Request verbs
    # ------------------------------------------------------------------ #

    def get(self, path: str) -> httpx.Response:
        return self._session.get(path)

    def get_with_query(self, path: str, query_params: QueryParams) -> httpx.Response:
        return self._session.get_with_query(path, query_params)

    def put(self, path: str, body: Any) -> httpx.Response:
        return self._session.put(path, body)

    def post(self, path: str, body: Any) -> httpx.Response:
        return self._session.post(path, body)

    # ------------------------------------------------------------------ #
    # User-scoped operations
    # ------------------------------------------------------------------ #

    def list_devices(self) -> list[device_api.Device]:
        """See :func:`mygpoclient.device.list_devices`."""
        return device_api.list_devices(self)

    def get_all_subscriptions(self) -> list[subscription_api.Podcast]:
        """See :func:`mygpoclient.subscription.get_all_subscriptions`."""
        return subscription_api.get_all_subscriptions(self)

    def retrieve_suggested_podcasts(self, max_results: int) -> list[suggestion_api.Suggestion]:
        """See :func:`mygpoclient.suggestion.retrieve_suggested_podcasts`."""
        return suggestion_api.retrieve_suggested_podcasts(self, max_results)
