"""mygpoclient -- a synchronous client for the gpodder.net web service.

The package authenticates as a gpodder.net user, optionally binds a device
identifier, and maps the service's JSON resources onto immutable Pydantic
models.

Typical usage::

    from mygpoclient import UserClient

    with UserClient("alice", "secret") as client:
        for device in client.list_devices():
            print(device)

        phone = client.device("phone")
        changes = phone.get_subscription_changes(since=0)

Modules:
    client: the authenticated session and the user/device scoped clients.
    device, subscription, suggestion, episode: resource types and operations.
    models: shared Pydantic bases and :class:`ClientConfig`.
    config: XDG-aware configuration and credential resolution.
    exceptions: the error hierarchy.
    output: stderr diagnostics with Rich support.
"""

__version__ = "0.3.0"

from mygpoclient.auth import Credentials
from mygpoclient.client import AuthenticatedSession, DeviceClient, UserClient
from mygpoclient.device import Device, DeviceType, DeviceUpdates, EpisodeUpdate
from mygpoclient.episode import EpisodeActionType
from mygpoclient.exceptions import GpodderError
from mygpoclient.models import UNSET, ClientConfig
from mygpoclient.subscription import (
    Podcast,
    SubscriptionChangeSet,
    SubscriptionDelta,
    SubscriptionDeltaResult,
)
from mygpoclient.suggestion import Suggestion

__all__ = [
    "__version__",
    "AuthenticatedSession",
    "ClientConfig",
    "Credentials",
    "Device",
    "DeviceClient",
    "DeviceType",
    "DeviceUpdates",
    "EpisodeActionType",
    "EpisodeUpdate",
    "GpodderError",
    "Podcast",
    "Suggestion",
    "SubscriptionChangeSet",
    "SubscriptionDelta",
    "SubscriptionDeltaResult",
    "UNSET",
    "UserClient",
]
