"""Episode action types.

`Episode Actions API <https://gpoddernet.readthedocs.io/en/latest/api/reference/events.html>`_

Only the action enumeration is modelled here; it appears as the ``status``
of an :class:`~mygpoclient.device.EpisodeUpdate`.
"""

from __future__ import annotations

import enum


class EpisodeActionType(str, enum.Enum):
    """Kind of action a user performed on an episode."""

    DOWNLOAD = "download"
    DELETE = "delete"
    PLAY = "play"
    NEW = "new"
    FLATTR = "flattr"

    def __str__(self) -> str:
        return self.value
