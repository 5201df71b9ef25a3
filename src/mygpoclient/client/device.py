"""Device-scoped client.

:class:`DeviceClient` binds a device identifier to a
:class:`~mygpoclient.client.user.UserClient`. It forwards the four request
verbs to the user client's session, offers the device-scoped operations,
and re-exposes the user-scoped ones through explicit delegating methods.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Optional, Union

import httpx
from pydantic import AnyHttpUrl

from mygpoclient import device as device_api
from mygpoclient import subscription as subscription_api
from mygpoclient import suggestion as suggestion_api
from mygpoclient.client.session import AuthenticatedSession, QueryParams
from mygpoclient.client.user import UserClient
from mygpoclient.exceptions import InvalidUsageError
from mygpoclient.models import UNSET, ClientConfig

DEVICE_ID_PATTERN = re.compile(r"[\w.-]+")


def validate_device_id(device_id: str) -> str:
    """Return *device_id* unchanged, or raise if it does not match ``[\\w.-]+``."""
    if not isinstance(device_id, str) or not DEVICE_ID_PATTERN.fullmatch(device_id):
        raise InvalidUsageError(
            f"Invalid device id {device_id!r}: must match the pattern [\\w.-]+"
        )
    return device_id


class DeviceClient:
    """Client for operations scoped to one device of a user.

    Args:
        user_client: The user client whose session is shared.
        device_id: Identifier of the device, matching ``[\\w.-]+``.

    Example::

        with DeviceClient.create("alice", "secret", "laptop") as client:
            client.update_device_data(caption="Work laptop")
            urls = client.get_subscriptions_of_device()
    """

    def __init__(self, user_client: UserClient, device_id: str) -> None:
        self._user_client = user_client
        self._device_id = validate_device_id(device_id)

    @classmethod
    def create(
        cls,
        username: str,
        password: str,
        device_id: str,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> DeviceClient:
        """Build a device client with its own session."""
        validate_device_id(device_id)
        return cls(UserClient(username, password, config=config, transport=transport), device_id)

    @property
    def user_client(self) -> UserClient:
        """The underlying user-scoped client."""
        return self._user_client

    @property
    def session(self) -> AuthenticatedSession:
        return self._user_client.session

    @property
    def username(self) -> str:
        return self._user_client.username

    @property
    def device_id(self) -> str:
        return self._device_id

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> DeviceClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        self._user_client.close()

    # ------------------------------------------------------------------ #
    # Request verbs
    # ------------------------------------------------------------------ #

    def get(self, path: str) -> httpx.Response:
        return self.session.get(path)

    def get_with_query(self, path: str, query_params: QueryParams) -> httpx.Response:
        return self.session.get_with_query(path, query_params)

    def put(self, path: str, body: Any) -> httpx.Response:
        return self.session.put(path, body)

    def post(self, path: str, body: Any) -> httpx.Response:
        return self.session.post(path, body)

    # ------------------------------------------------------------------ #
    # Device-scoped operations
    # ------------------------------------------------------------------ #

    def update_device_data(
        self,
        caption: str = UNSET,
        device_type: Union[device_api.DeviceType, str] = UNSET,
    ) -> None:
        """See :func:`mygpoclient.device.update_device_data`."""
        device_api.update_device_data(self, caption=caption, device_type=device_type)

    def get_device_updates(self, since: int, include_actions: bool) -> device_api.DeviceUpdates:
        """See :func:`mygpoclient.device.get_device_updates`."""
        return device_api.get_device_updates(self, since, include_actions)

    def get_subscriptions_of_device(self) -> list[AnyHttpUrl]:
        """See :func:`mygpoclient.subscription.get_subscriptions_of_device`."""
        return subscription_api.get_subscriptions_of_device(self)

    def upload_subscriptions_of_device(self, urls: Iterable[subscription_api.UrlLike]) -> None:
        """See :func:`mygpoclient.subscription.upload_subscriptions_of_device`."""
        subscription_api.upload_subscriptions_of_device(self, urls)

    def upload_subscription_changes(
        self,
        add: Iterable[subscription_api.UrlLike],
        remove: Iterable[subscription_api.UrlLike],
    ) -> subscription_api.SubscriptionDeltaResult:
        """See :func:`mygpoclient.subscription.upload_subscription_changes`."""
        return subscription_api.upload_subscription_changes(self, add, remove)

    def get_subscription_changes(self, since: int) -> subscription_api.SubscriptionChangeSet:
        """See :func:`mygpoclient.subscription.get_subscription_changes`."""
        return subscription_api.get_subscription_changes(self, since)

    # ------------------------------------------------------------------ #
    # User-scoped operations, delegated
    # ------------------------------------------------------------------ #

    def list_devices(self) -> list[device_api.Device]:
        return self._user_client.list_devices()

    def get_all_subscriptions(self) -> list[subscription_api.Podcast]:
        return self._user_client.get_all_subscriptions()

    def retrieve_suggested_podcasts(self, max_results: int) -> list[suggestion_api.Suggestion]:
        return self._user_client.retrieve_suggested_podcasts(max_results)
