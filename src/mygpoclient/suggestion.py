"""Suggestions API.

`Suggestions API <https://gpoddernet.readthedocs.io/en/latest/api/reference/suggestions.html>`_
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import AnyHttpUrl, Field

from mygpoclient.client.response import parse_response
from mygpoclient.exceptions import InvalidUsageError
from mygpoclient.models import KeyedModel

if TYPE_CHECKING:
    from mygpoclient.client.user import UserClient

MAX_SUGGESTIONS = 100


class Suggestion(KeyedModel):
    """A podcast suggested to the user, identified by its feed URL."""

    feed_url: AnyHttpUrl = Field(alias="url")
    title: str
    description: str
    subscriber_count: int = Field(alias="subscribers")
    subscriber_count_prior_week: int = Field(alias="subscribers_last_week")
    logo_url: Optional[AnyHttpUrl] = None
    website: AnyHttpUrl
    internal_link: AnyHttpUrl = Field(alias="mygpo_link")

    def natural_key(self) -> str:
        return str(self.feed_url)

    def __str__(self) -> str:
        return f"{self.title}: {self.description} <{self.feed_url}>"


def retrieve_suggested_podcasts(client: UserClient, max_results: int) -> list[Suggestion]:
    """Retrieve Suggested Podcasts.

    Downloads podcasts the user has not subscribed to on any device but
    that might interest them, based on their server-side subscriptions. The
    server limits the answer to *max_results* entries and may return fewer;
    the list is returned exactly as received.

    The server gives no relevance score. Applications should filter out
    podcasts they already track locally but have not uploaded yet.

    Raises:
        InvalidUsageError: If *max_results* is not between 1 and 100.
    """
    if isinstance(max_results, bool) or not isinstance(max_results, int):
        raise InvalidUsageError(f"max_results must be an integer, got {max_results!r}")
    if not 1 <= max_results <= MAX_SUGGESTIONS:
        raise InvalidUsageError(
            f"max_results must be between 1 and {MAX_SUGGESTIONS}, got {max_results}"
        )
    response = client.get(f"/suggestions/{max_results}.json")
    return parse_response(response, list[Suggestion])
