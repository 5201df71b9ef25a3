"""Subscriptions API.

`Subscriptions API <https://gpoddernet.readthedocs.io/en/latest/api/reference/subscriptions.html>`_

Two synchronisation styles are supported:

- **Full snapshot** -- :func:`get_subscriptions_of_device` /
  :func:`upload_subscriptions_of_device`. An upload replaces the device's
  whole list; any URL left out is unsubscribed.
- **Delta** -- :func:`upload_subscription_changes` /
  :func:`get_subscription_changes`. The server issues an opaque
  ``timestamp`` with every answer; store it and pass it back as ``since``
  on the next pull.

Neither style deduplicates or reorders URLs client-side.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Union

from pydantic import AnyHttpUrl, Field, TypeAdapter, ValidationError

from mygpoclient.client.response import ensure_success, parse_response
from mygpoclient.exceptions import InvalidUsageError
from mygpoclient.models import KeyedModel, WireModel

if TYPE_CHECKING:
    from mygpoclient.client.device import DeviceClient
    from mygpoclient.client.user import UserClient

UrlLike = Union[str, AnyHttpUrl]

_URL_LIST = TypeAdapter(list[AnyHttpUrl])


def to_urls(urls: Iterable[UrlLike]) -> list[AnyHttpUrl]:
    """Validate *urls*, keeping their order and any duplicates.

    Raises:
        InvalidUsageError: If any entry is not an absolute http(s) URL.
    """
    try:
        return _URL_LIST.validate_python([str(url) for url in urls])
    except ValidationError as exc:
        raise InvalidUsageError(f"Invalid podcast URL: {exc}") from exc


class Podcast(KeyedModel):
    """A podcast as listed in a user's subscriptions.

    Identity is the feed URL alone: two records for the same feed are
    equal, sort equal and hash equal whatever their metadata says.
    """

    feed_url: AnyHttpUrl = Field(alias="url")
    title: str
    author: Optional[str] = None
    description: str
    subscriber_count: int = Field(alias="subscribers")
    subscriber_count_prior_week: int = Field(alias="subscribers_last_week")
    logo_url: Optional[AnyHttpUrl] = None
    scaled_logo_url: Optional[AnyHttpUrl] = None
    website: Optional[AnyHttpUrl] = None
    internal_link: AnyHttpUrl = Field(alias="mygpo_link")

    def natural_key(self) -> str:
        return str(self.feed_url)

    def __str__(self) -> str:
        return f"{self.title}: {self.description} <{self.feed_url}>"


class SubscriptionDelta(WireModel):
    """Request body of :func:`upload_subscription_changes`."""

    add: list[AnyHttpUrl]
    remove: list[AnyHttpUrl]


class SubscriptionDeltaResult(WireModel):
    """Answer to :func:`upload_subscription_changes`.

    The server may sanitise uploaded URLs; each rewrite is reported as an
    ``(original, canonical)`` pair. Only the URL changes, not the content,
    so the client should simply adopt the canonical value (see
    :meth:`apply`).
    """

    timestamp: int
    rewritten_urls: list[tuple[AnyHttpUrl, AnyHttpUrl]] = Field(alias="update_urls")

    def apply(self, urls: Iterable[UrlLike]) -> list[AnyHttpUrl]:
        """Return *urls* with every rewritten entry replaced by its canonical URL."""
        rewrites = {str(original): canonical for original, canonical in self.rewritten_urls}
        return [rewrites.get(str(url), url) for url in to_urls(urls)]

    def __str__(self) -> str:
        pairs = ", ".join(f"({original}, {canonical})" for original, canonical in self.rewritten_urls)
        return f"{self.timestamp}: [{pairs}]"


class SubscriptionChangeSet(WireModel):
    """Answer to :func:`get_subscription_changes`."""

    timestamp: int
    add: list[AnyHttpUrl]
    remove: list[AnyHttpUrl]

    def __str__(self) -> str:
        add = ", ".join(str(url) for url in self.add)
        remove = ", ".join(str(url) for url in self.remove)
        return f"{self.timestamp}: add[{add}], remove[{remove}]"


# --- Operations ---


def get_all_subscriptions(client: UserClient) -> list[Podcast]:
    """Get All Subscriptions.

    Returns the podcasts subscribed on any of the user's devices. Useful to
    present a list when an application starts for the first time.
    """
    response = client.get(f"/subscriptions/{client.username}.json")
    return parse_response(response, list[Podcast])


def get_subscriptions_of_device(client: DeviceClient) -> list[AnyHttpUrl]:
    """Get Subscriptions of Device, as feed URLs only."""
    response = client.get(f"/subscriptions/{client.username}/{client.device_id}.json")
    return parse_response(response, list[AnyHttpUrl])


def upload_subscriptions_of_device(client: DeviceClient, urls: Iterable[UrlLike]) -> None:
    """Upload Subscriptions of Device.

    Replaces the device's entire subscription list with *urls*. An empty
    iterable unsubscribes the device from everything.
    """
    body = [str(url) for url in to_urls(urls)]
    response = client.put(f"/subscriptions/{client.username}/{client.device_id}.json", body)
    ensure_success(response)


def upload_subscription_changes(
    client: DeviceClient,
    add: Iterable[UrlLike],
    remove: Iterable[UrlLike],
) -> SubscriptionDeltaResult:
    """Upload Subscription Changes.

    Only deltas are sent; the timestamp is issued by the server. Apply
    :attr:`SubscriptionDeltaResult.rewritten_urls` to the local list
    afterwards.
    """
    delta = SubscriptionDelta(add=to_urls(add), remove=to_urls(remove))
    response = client.post(
        f"/api/2/subscriptions/{client.username}/{client.device_id}.json",
        delta.to_wire(),
    )
    return parse_response(response, SubscriptionDeltaResult)


def get_subscription_changes(client: DeviceClient, since: int) -> SubscriptionChangeSet:
    """Get Subscription Changes since the server timestamp *since* (``0`` for all)."""
    response = client.get_with_query(
        f"/api/2/subscriptions/{client.username}/{client.device_id}.json",
        [("since", since)],
    )
    return parse_response(response, SubscriptionChangeSet)
