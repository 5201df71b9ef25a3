"""Device API.

`Device API <https://gpoddernet.readthedocs.io/en/latest/api/reference/devices.html>`_

Devices identify a client application within a user account. A device ID
can be any string matching ``[\\w.-]+``; the application must generate it
and should keep it unique within the account (combining the application
name with the host name works well). Two applications sharing an ID may
overwrite each other's subscriptions server-side. Uniqueness is not
checked here.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING, Optional, Union

from pydantic import AnyHttpUrl, Field, ValidationError

from mygpoclient.client.response import ensure_success, parse_response
from mygpoclient.episode import EpisodeActionType
from mygpoclient.exceptions import InvalidUsageError
from mygpoclient.models import UNSET, KeyedModel, WireModel
from mygpoclient.subscription import Podcast

if TYPE_CHECKING:
    from mygpoclient.client.device import DeviceClient
    from mygpoclient.client.user import UserClient


class DeviceType(str, enum.Enum):
    """Type of a :class:`Device`. Serialised in lowercase."""

    DESKTOP = "desktop"
    LAPTOP = "laptop"
    MOBILE = "mobile"
    SERVER = "server"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value.capitalize()


class Device(KeyedModel):
    """A device registered in the user's account.

    Identity is the device id alone, so a set of devices stays keyed by id
    while caption, type and subscription count may change.
    """

    id: str
    caption: str
    device_type: DeviceType = Field(alias="type")
    subscription_count: int = Field(alias="subscriptions")

    def natural_key(self) -> str:
        return self.id

    def __str__(self) -> str:
        return f"{self.device_type!s} {self.caption} (id={self.id})"


class DeviceData(WireModel):
    """Request body of :func:`update_device_data`.

    Only fields passed to the constructor are serialised; see
    :meth:`~mygpoclient.models.WireModel.to_wire`.
    """

    caption: str = ""
    device_type: DeviceType = Field(default=DeviceType.OTHER, alias="type")


class EpisodeUpdate(WireModel):
    """Episode information as found in :attr:`DeviceUpdates.updates`."""

    title: str
    episode_url: AnyHttpUrl = Field(alias="url")
    podcast_title: str
    podcast_url: AnyHttpUrl
    description: str
    website_url: AnyHttpUrl = Field(alias="website")
    internal_link: AnyHttpUrl = Field(alias="mygpo_link")
    released_at: datetime = Field(alias="released")
    status: Optional[EpisodeActionType] = None


class DeviceUpdates(WireModel):
    """Answer to :func:`get_device_updates`."""

    add: list[Podcast]
    remove: list[AnyHttpUrl] = Field(alias="rem")
    updates: list[EpisodeUpdate]
    timestamp: int


# --- Operations ---


def list_devices(client: UserClient) -> list[Device]:
    """List Devices.

    Returns every device that belongs to the user, e.g. to let the user pick
    one from which to retrieve subscriptions.
    """
    response = client.get(f"/api/2/devices/{client.username}.json")
    return parse_response(response, list[Device])


def update_device_data(
    client: DeviceClient,
    caption: str = UNSET,
    device_type: Union[DeviceType, str] = UNSET,
) -> None:
    """Update Device Data.

    Creates the device if it does not exist yet. Arguments left at
    :data:`~mygpoclient.models.UNSET` are omitted from the request body so
    the server keeps its current value; with both unset the body is ``{}``.

    Args:
        client: The device to update.
        caption: New human readable label.
        device_type: A :class:`DeviceType` or its lowercase name.

    Raises:
        InvalidUsageError: If a supplied value is invalid (``None`` included).
    """
    present: dict[str, object] = {}
    if caption is not UNSET:
        present["caption"] = caption
    if device_type is not UNSET:
        present["device_type"] = device_type
    try:
        data = DeviceData(**present)
    except ValidationError as exc:
        raise InvalidUsageError(f"Invalid device data: {exc}") from exc

    response = client.post(
        f"/api/2/devices/{client.username}/{client.device_id}.json",
        data.to_wire(),
    )
    ensure_success(response)


def get_device_updates(client: DeviceClient, since: int, include_actions: bool) -> DeviceUpdates:
    """Get Device Updates.

    Args:
        client: The device whose updates are requested.
        since: Timestamp from a previous answer, or ``0`` for a full sync.
        include_actions: Whether to report the latest episode action per
            episode in :attr:`EpisodeUpdate.status`.
    """
    response = client.get_with_query(
        f"/api/2/updates/{client.username}/{client.device_id}.json",
        [("since", since), ("include_actions", "true" if include_actions else "false")],
    )
    return parse_response(response, DeviceUpdates)
