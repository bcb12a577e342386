"""Records describing a single tracking call."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Mapping

    from kissmetrics.core.analytics.query import QueryEncoder


def current_timestamp() -> int:
    """Current unix epoch time in whole seconds."""
    return int(time.time())


@dataclass
class Event:
    """An event performed by a user.

    ``timestamp`` is only sent when ``properties`` do not carry their own
    ``_d`` and ``_t`` keys.
    """

    name: str
    identity: str
    properties: Mapping[str, str] | None = None
    timestamp: int = field(default_factory=current_timestamp)

    def to_query(self, encoder: QueryEncoder) -> str:
        return encoder.create_event_query(self.name, self.properties, self.identity, self.timestamp)


@dataclass
class PropertiesUpdate:
    """Properties set on a user."""

    identity: str
    properties: Mapping[str, str] | None = None
    timestamp: int = field(default_factory=current_timestamp)

    def to_query(self, encoder: QueryEncoder) -> str:
        return encoder.create_properties_query(self.properties, self.identity, self.timestamp)


@dataclass
class Alias:
    """Ties ``alias`` to an existing ``identity``."""

    alias: str
    identity: str

    def to_query(self, encoder: QueryEncoder) -> str:
        return encoder.create_alias_query(self.alias, self.identity)


Record = Union[Event, PropertiesUpdate, Alias]
