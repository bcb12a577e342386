"""Query string encoding for the KISSmetrics tracking API."""

from __future__ import annotations

__version__ = "2.0.0"

__all__ = [
    "Alias",
    "EncoderSettings",
    "Event",
    "KISSmetricsWarning",
    "PropertiesUpdate",
    "QueryEncoder",
    "encode",
]

from kissmetrics.core.analytics.diagnostics import KISSmetricsWarning
from kissmetrics.core.analytics.encoding import encode
from kissmetrics.core.analytics.events import Alias, Event, PropertiesUpdate
from kissmetrics.core.analytics.query import QueryEncoder
from kissmetrics.core.analytics.settings import EncoderSettings
