"""Shared test fixtures for mygpoclient.

Provides an in-memory stand-in for gpodder.net served through
:class:`httpx.MockTransport`, clients wired to it, sample wire payloads,
and an autouse fixture that resets the global output manager so tests
never leak diagnostics configuration into each other.
"""

from __future__ import annotations

import base64
import json
import re
from typing import Any, Callable

import httpx
import pytest

from mygpoclient.client import DeviceClient, UserClient
from mygpoclient.models import ClientConfig
from mygpoclient.output import reset_output

USERNAME = "alice"
PASSWORD = "s3cret"
DEVICE_ID = "laptop-1"
BASE_URL = "https://gpodder.test"


# ---------------------------------------------------------------------------
# Sample payloads
# ---------------------------------------------------------------------------


def _podcast_payload(url: str, **overrides: Any) -> dict[str, Any]:
    """Wire representation of a podcast, as gpodder.net sends it."""
    data: dict[str, Any] = {
        "url": url,
        "title": "Going Linux",
        "author": None,
        "description": "Going Linux",
        "subscribers": 571,
        "subscribers_last_week": 570,
        "logo_url": "http://goinglinux.com/images/GoingLinux80.png",
        "scaled_logo_url": "http://goinglinux.com/images/GoingLinux80.png",
        "website": "http://goinglinux.com/",
        "mygpo_link": "http://gpodder.net/podcast/11171",
    }
    data.update(overrides)
    return data


def _suggestion_payload(url: str, title: str = "Linux Outlaws") -> dict[str, Any]:
    return {
        "url": url,
        "title": title,
        "description": f"{title} description",
        "subscribers": 1051,
        "subscribers_last_week": 1049,
        "logo_url": None,
        "website": "http://linuxoutlaws.com/",
        "mygpo_link": "http://gpodder.net/podcast/11092",
    }


# ---------------------------------------------------------------------------
# Fake gpodder.net
# ---------------------------------------------------------------------------


class FakeGpodderService:
    """A minimal, stateful gpodder.net for one user.

    Every request is recorded in :attr:`requests`. Requests without the
    expected Basic credentials get a 401.
    """

    def __init__(self, username: str = USERNAME, password: str = PASSWORD) -> None:
        token = base64.b64encode(f"{username}:{password}".encode()).decode()
        self.expected_auth = f"Basic {token}"
        self.username = username
        self.password = password
        self.requests: list[httpx.Request] = []
        self.devices: dict[str, dict[str, str]] = {}
        self.subscriptions: dict[str, list[str]] = {}
        self.changes: list[tuple[int, str, str, str]] = []
        self.rewrites: dict[str, str] = {}
        self.suggestions: list[dict[str, Any]] = []
        self.episode_updates: list[dict[str, Any]] = []
        self._clock = 1000

    # -- helpers ----------------------------------------------------------

    def _tick(self) -> int:
        self._clock += 1
        return self._clock

    def _record(self, device_id: str, action: str, url: str) -> int:
        timestamp = self._tick()
        self.changes.append((timestamp, device_id, action, url))
        return timestamp

    def _ensure_device(self, device_id: str) -> None:
        self.devices.setdefault(device_id, {"caption": "", "type": "other"})
        self.subscriptions.setdefault(device_id, [])

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)

    # -- routing ----------------------------------------------------------

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("authorization") != self.expected_auth:
            return httpx.Response(401, text="Unauthorized")

        path = request.url.path
        user = re.escape(self.username)
        routes = [
            ("GET", rf"/api/2/devices/{user}\.json", self._list_devices),
            ("POST", rf"/api/2/devices/{user}/([\w.-]+)\.json", self._update_device),
            ("GET", rf"/api/2/updates/{user}/([\w.-]+)\.json", self._device_updates),
            ("GET", rf"/subscriptions/{user}\.json", self._all_subscriptions),
            ("GET", rf"/subscriptions/{user}/([\w.-]+)\.json", self._device_subscriptions),
            ("PUT", rf"/subscriptions/{user}/([\w.-]+)\.json", self._replace_subscriptions),
            ("POST", rf"/api/2/subscriptions/{user}/([\w.-]+)\.json", self._upload_changes),
            ("GET", rf"/api/2/subscriptions/{user}/([\w.-]+)\.json", self._get_changes),
            ("GET", r"/suggestions/(\d+)\.json", self._suggestions),
        ]
        for method, pattern, handler in routes:
            match = re.fullmatch(pattern, path)
            if request.method == method and match:
                return handler(request, *match.groups())
        return httpx.Response(404, text="Not Found")

    def _list_devices(self, request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {
                    "id": device_id,
                    "caption": info["caption"],
                    "type": info["type"],
                    "subscriptions": len(self.subscriptions.get(device_id, [])),
                }
                for device_id, info in self.devices.items()
            ],
        )

    def _update_device(self, request: httpx.Request, device_id: str) -> httpx.Response:
        self._ensure_device(device_id)
        self.devices[device_id].update(json.loads(request.content))
        return httpx.Response(200, content=b"")

    def _device_updates(self, request: httpx.Request, device_id: str) -> httpx.Response:
        since = int(request.url.params["since"])
        added = [url for ts, dev, action, url in self.changes if ts > since and action == "add" and dev != device_id]
        removed = [url for ts, dev, action, url in self.changes if ts > since and action == "remove" and dev != device_id]
        return httpx.Response(
            200,
            json={
                "add": [_podcast_payload(url) for url in added],
                "rem": removed,
                "updates": self.episode_updates,
                "timestamp": self._clock,
            },
        )

    def _all_subscriptions(self, request: httpx.Request) -> httpx.Response:
        seen: list[str] = []
        for urls in self.subscriptions.values():
            seen.extend(url for url in urls if url not in seen)
        return httpx.Response(200, json=[_podcast_payload(url) for url in seen])

    def _device_subscriptions(self, request: httpx.Request, device_id: str) -> httpx.Response:
        if device_id not in self.subscriptions:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(200, json=self.subscriptions[device_id])

    def _replace_subscriptions(self, request: httpx.Request, device_id: str) -> httpx.Response:
        self._ensure_device(device_id)
        new = json.loads(request.content)
        old = self.subscriptions[device_id]
        for url in new:
            if url not in old:
                self._record(device_id, "add", url)
        for url in old:
            if url not in new:
                self._record(device_id, "remove", url)
        self.subscriptions[device_id] = list(new)
        return httpx.Response(200, content=b"")

    def _upload_changes(self, request: httpx.Request, device_id: str) -> httpx.Response:
        self._ensure_device(device_id)
        body = json.loads(request.content)
        update_urls = []
        current = self.subscriptions[device_id]
        timestamp = self._clock
        for url in body["add"]:
            canonical = self.rewrites.get(url, url)
            if canonical != url:
                update_urls.append([url, canonical])
            if canonical not in current:
                current.append(canonical)
            timestamp = self._record(device_id, "add", canonical)
        for url in body["remove"]:
            if url in current:
                current.remove(url)
            timestamp = self._record(device_id, "remove", url)
        return httpx.Response(200, json={"timestamp": timestamp, "update_urls": update_urls})

    def _get_changes(self, request: httpx.Request, device_id: str) -> httpx.Response:
        since = int(request.url.params["since"])
        relevant = [(action, url) for ts, dev, action, url in self.changes if ts > since and dev == device_id]
        return httpx.Response(
            200,
            json={
                "timestamp": self._clock,
                "add": [url for action, url in relevant if action == "add"],
                "remove": [url for action, url in relevant if action == "remove"],
            },
        )

    def _suggestions(self, request: httpx.Request, count: str) -> httpx.Response:
        return httpx.Response(200, json=self.suggestions[: int(count)])


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test."""
    yield
    reset_output()


@pytest.fixture
def fake_service() -> FakeGpodderService:
    return FakeGpodderService()


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, timeout=5)


@pytest.fixture
def user_client(fake_service: FakeGpodderService, client_config: ClientConfig) -> UserClient:
    client = UserClient(
        USERNAME, PASSWORD, config=client_config, transport=httpx.MockTransport(fake_service)
    )
    yield client
    client.close()


@pytest.fixture
def device_client(user_client: UserClient) -> DeviceClient:
    return user_client.device(DEVICE_ID)



@pytest.fixture
def make_user_client(client_config: ClientConfig) -> Callable[..., UserClient]:
    """Factory for a :class:`UserClient` backed by an arbitrary MockTransport handler."""
    clients: list[UserClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> UserClient:
        client = UserClient(
            USERNAME, PASSWORD, config=client_config, transport=httpx.MockTransport(handler)
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


# ---------------------------------------------------------------------------
# Payload factories
# ---------------------------------------------------------------------------


@pytest.fixture
def podcast_payload() -> Callable[..., dict[str, Any]]:
    """Factory for podcast wire payloads: ``podcast_payload(url, **overrides)``."""
    return _podcast_payload


@pytest.fixture
def suggestion_payload() -> Callable[..., dict[str, Any]]:
    """Factory for suggestion wire payloads: ``suggestion_payload(url, title=...)``."""
    return _suggestion_payload
