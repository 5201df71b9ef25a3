"""HTTP Basic authentication for gpodder.net.

:class:`Credentials` holds the user name and password for the lifetime of a
session. The password is a :class:`pydantic.SecretStr`, so it is masked in
``repr``/``str`` output and excluded from JSON dumps. :func:`basic_auth_header`
turns the pair into an ``Authorization: Basic <encoded>`` header per
:rfc:`7617`.
"""

from __future__ import annotations

import base64
import re

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

from mygpoclient.exceptions import InvalidUsageError

USERNAME_PATTERN = re.compile(r"[\w.@+-]+")


class Credentials(BaseModel):
    """Immutable user name / password pair.

    Example::

        creds = Credentials(username="alice", password="secret")
        assert "secret" not in repr(creds)
    """

    model_config = ConfigDict(frozen=True)

    username: str
    password: SecretStr

    @field_validator("username")
    @classmethod
    def _username_is_path_safe(cls, value: str) -> str:
        # The name becomes a URL path segment; no colon either (RFC 7617).
        if not USERNAME_PATTERN.fullmatch(value):
            raise ValueError(f"username {value!r} must match the pattern [\\w.@+-]+")
        return value

    @classmethod
    def of(cls, username: str, password: str) -> Credentials:
        """Build credentials, raising :class:`InvalidUsageError` on bad input."""
        try:
            return cls(username=username, password=password)
        except ValueError as exc:
            raise InvalidUsageError(f"Invalid credentials: {exc}") from exc


def basic_auth_header(credentials: Credentials) -> dict[str, str]:
    """Return the ``Authorization`` header for *credentials*.

    Args:
        credentials: The user name and password to encode.

    Returns:
        A one-entry header dict, e.g. ``{"Authorization": "Basic YWxp..."}``.
    """
    raw = f"{credentials.username}:{credentials.password.get_secret_value()}"
    encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {encoded}"}
