"""Shared Pydantic bases and configuration models.

Every resource module builds its wire records on the two bases defined
here:

* :class:`WireModel` -- an immutable record with Python field names and
  gpodder.net wire aliases. It accepts either spelling on input and
  serialises by alias.
* :class:`KeyedModel` -- a :class:`WireModel` whose equality, ordering and
  hashing are driven by a single natural key (a device id or a feed URL)
  rather than by all of its fields.

The module also holds :class:`ClientConfig`, the persisted connection
settings, and the :data:`UNSET` sentinel used for partial updates.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://gpodder.net"


class _Unset:
    """Marker for an argument the caller did not supply."""

    _instance: Optional[_Unset] = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()
"""Default for optional partial-update arguments. Absent fields are left
out of the request body entirely, which is different from sending ``null``."""


# --- Wire record bases ---


class WireModel(BaseModel):
    """Immutable record exchanged with gpodder.net."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready payload, keyed by wire names.

        Fields that were never set on construction are omitted.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class KeyedModel(WireModel):
    """Wire record identified by exactly one natural key.

    Two instances of the same class with equal :meth:`natural_key` values
    compare equal, sort equal and hash equal even when every other field
    differs. Instances of different classes never compare equal.
    """

    def natural_key(self) -> str:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.natural_key() == other.natural_key()  # type: ignore[attr-defined]

    def __lt__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.natural_key() < other.natural_key()  # type: ignore[attr-defined]

    def __le__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.natural_key() <= other.natural_key()  # type: ignore[attr-defined]

    def __gt__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.natural_key() > other.natural_key()  # type: ignore[attr-defined]

    def __ge__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.natural_key() >= other.natural_key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self.natural_key())


# --- Client configuration ---


class ClientConfig(BaseModel):
    """Connection settings persisted at ``~/.config/mygpoclient/config.json``.

    The password is deliberately absent: only a credential *source*
    descriptor (``env:VAR``, ``file:/path`` or ``prompt``) is stored, and it
    is resolved at runtime by :func:`~mygpoclient.config.resolve_credential`.

    Example::

        ClientConfig(
            username="alice",
            password_source="env:GPODDER_NET_PASSWORD",
            device_id="laptop",
        )
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Scheme and host of the gpodder.net service"
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    username: Optional[str] = Field(default=None, description="gpodder.net user name")
    password_source: Optional[str] = Field(
        default=None,
        description="Credential source: env:VAR, file:/path, prompt",
    )
    device_id: Optional[str] = Field(
        default=None, description="Device identifier for device-scoped operations"
    )
