"""Turn :class:`httpx.Response` objects into typed results or errors.

The session returns responses verbatim; every resource operation passes
them through this module:

* :func:`ensure_success` maps non-2xx statuses onto the
  :class:`~mygpoclient.exceptions.HTTPStatusError` family.
* :func:`parse_response` additionally decodes the JSON body into the
  requested type with a Pydantic :class:`~pydantic.TypeAdapter`. A body
  that is not JSON, or does not match the type, raises
  :class:`~mygpoclient.exceptions.DeserializationError`; nothing is ever
  defaulted.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from mygpoclient.exceptions import (
    AuthError,
    DeserializationError,
    HTTPStatusError,
    NotFoundError,
    ServerError,
)

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def ensure_success(response: httpx.Response) -> httpx.Response:
    """Raise a typed exception unless *response* has a 2xx status.

    Args:
        response: The response returned by the session.

    Returns:
        The same response, for chaining.

    Raises:
        AuthError: On 401 / 403.
        NotFoundError: On 404.
        ServerError: On 5xx.
        HTTPStatusError: On any other non-2xx status.
    """
    status = response.status_code
    if 200 <= status < 300:
        return response

    detail = response.text[:200].strip() if response.content else ""
    prefix = f"HTTP {status} for {response.request.method} {response.request.url.path}"
    message = f"{prefix}: {detail}" if detail else prefix

    if status in (401, 403):
        raise AuthError(message, status)
    if status == 404:
        raise NotFoundError(message, status)
    if status >= 500:
        raise ServerError(message, status)
    raise HTTPStatusError(message, status)


def parse_response(response: httpx.Response, type_: type[T]) -> T:
    """Check the status of *response* and decode its JSON body as *type_*.

    Args:
        response: The response returned by the session.
        type_: Target type, e.g. ``list[Device]`` or ``DeviceUpdates``.

    Returns:
        The validated value.

    Raises:
        HTTPStatusError: See :func:`ensure_success`.
        DeserializationError: If the body is not valid JSON for *type_*.
    """
    ensure_success(response)
    try:
        return _adapter(type_).validate_json(response.content)
    except ValidationError as exc:
        raise DeserializationError(
            f"Unexpected response body from {response.request.url.path}: {exc}"
        ) from exc
