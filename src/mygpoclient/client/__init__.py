"""HTTP client layer for mygpoclient.

Classes:
    :class:`AuthenticatedSession` -- executes authenticated requests
    (Basic auth + fixed ``User-Agent``) backed by :class:`httpx.Client`.
    :class:`UserClient` -- user-scoped operations (devices list, all
    subscriptions, suggestions).
    :class:`DeviceClient` -- device-scoped operations; delegates to a
    :class:`UserClient` for the user-scoped ones.

All three are context managers that close the connection pool on exit.
"""

from mygpoclient.client.session import AuthenticatedSession
from mygpoclient.client.user import UserClient
from mygpoclient.client.device import DeviceClient

__all__ = ["AuthenticatedSession", "UserClient", "DeviceClient"]
