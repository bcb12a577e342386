"""Query encoder for KISSmetricsAPI tracking requests.

Queries are path + query suffixes only; the transport prepends scheme and
host and issues the GET request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kissmetrics.core.analytics.diagnostics import WarningSink, emit
from kissmetrics.core.analytics.encoding import encode
from kissmetrics.core.analytics.settings import EncoderSettings

if TYPE_CHECKING:
    from collections.abc import Mapping

    from kissmetrics.core.analytics.events import Record

EVENT_PATH = "/e"
PROP_PATH = "/s"
ALIAS_PATH = "/a"

MAX_KEY_LENGTH = 255

# Both keys present means the properties carry their own timestamp
TIMESTAMP_KEYS = ("_d", "_t")


class QueryEncoder:
    """URL encoder for KISSmetricsAPI queries.

    ``key``, ``client_type`` and ``user_agent`` are trusted configuration and
    are written into every query as given. Identities, event names and
    properties are percent-encoded per call. No method raises: invalid
    properties are dropped and reported to ``warn``.

    Args:
        key: KISSmetrics product key
        client_type: Client identifier and version string
        user_agent: User agent string
        warn: Diagnostic sink, defaults to issuing a ``KISSmetricsWarning``

    """

    def __init__(self, key: str, client_type: str, user_agent: str, warn: WarningSink | None = None) -> None:
        self.settings = EncoderSettings(key=key, client_type=client_type, user_agent=user_agent)
        self.warn = warn

    @classmethod
    def from_settings(cls, settings: EncoderSettings, warn: WarningSink | None = None) -> QueryEncoder:
        return cls(settings.key, settings.client_type, settings.user_agent, warn=warn)

    @classmethod
    def from_env(
        cls,
        key: str | None = None,
        client_type: str | None = None,
        user_agent: str | None = None,
        warn: WarningSink | None = None,
    ) -> QueryEncoder:
        """Create an encoder from ``EncoderSettings.from_env``."""
        return cls.from_settings(EncoderSettings.from_env(key, client_type, user_agent), warn=warn)

    @property
    def key(self) -> str:
        return self.settings.key

    @property
    def client_type(self) -> str:
        return self.settings.client_type

    @property
    def user_agent(self) -> str:
        return self.settings.user_agent

    def _base_query(self, path: str, person: str) -> str:
        return f"{path}?_k={self.key}&_c={self.client_type}&_u={self.user_agent}&_p={person}"

    def create_alias_query(self, alias: str, identity: str) -> str:
        """Assemble an alias query.

        Note the alias is sent as ``_p`` and the identity as ``_n``.

        Args:
            alias: User alias to apply to an identity
            identity: User identity

        Returns:
            The URL encoded query string

        """
        return f"{self._base_query(ALIAS_PATH, self.encode_identity(alias))}&_n={self.encode_identity(identity)}"

    def create_event_query(
        self,
        name: str,
        properties: Mapping[str, Any] | None,
        identity: str,
        timestamp: int,
    ) -> str:
        """Assemble an event query.

        Args:
            name: Event name
            properties: Event properties
            identity: User identity
            timestamp: Unix epoch seconds, applied unless ``_d`` and ``_t``
                are set in ``properties``

        Returns:
            The URL encoded query string

        """
        query = f"{self._base_query(EVENT_PATH, self.encode_identity(identity))}&_n={self.encode_event(name)}"
        return query + self._timestamp_and_properties(properties, timestamp)

    def create_properties_query(self, properties: Mapping[str, Any] | None, identity: str, timestamp: int) -> str:
        """Assemble a properties query.

        Args:
            properties: User properties
            identity: User identity
            timestamp: Unix epoch seconds, applied unless ``_d`` and ``_t``
                are set in ``properties``

        Returns:
            The URL encoded query string

        """
        query = self._base_query(PROP_PATH, self.encode_identity(identity))
        return query + self._timestamp_and_properties(properties, timestamp)

    def create_query(self, record: Record) -> str:
        """Assemble the query for an ``Event``, ``PropertiesUpdate`` or ``Alias``."""
        return record.to_query(self)

    def _timestamp_and_properties(self, properties: Mapping[str, Any] | None, timestamp: int) -> str:
        suffix = "" if properties_contain_timestamp(properties) else f"&_d=1&_t={int(timestamp)}"
        return suffix + self.encode_properties(properties)

    def encode(self, value: str) -> str:
        return encode(value, self.warn)

    def encode_event(self, name: str) -> str:
        return self.encode(name)

    def encode_identity(self, identity: str) -> str:
        return self.encode(identity)

    def encode_properties(self, properties: Mapping[str, Any] | None) -> str:
        """URL encode properties as ``&key=value`` segments.

        Each entry is checked on its own; an invalid entry is dropped with a
        diagnostic and the rest are still encoded. Non-string keys and values
        are converted with ``str()``.

        Args:
            properties: User or event properties

        Returns:
            The encoded segments in iteration order, or an empty string

        """
        if not properties:
            return ""

        segments: list[str] = []
        for raw_key, raw_value in properties.items():
            key = raw_key if isinstance(raw_key, str) else str(raw_key)
            if not key:
                emit(self.warn, "Property keys must not be empty strings. Dropping property.")
                continue

            escaped_key = self.encode(key)
            if len(escaped_key) > MAX_KEY_LENGTH:
                emit(
                    self.warn,
                    f"Property key cannot be longer than {MAX_KEY_LENGTH} characters. When URL escaped, "
                    f"your key is {len(escaped_key)} characters long (the submitted value is {key}, "
                    f"the URL escaped value is {escaped_key}). Dropping property.",
                )
                continue

            value = raw_value if raw_value is None or isinstance(raw_value, str) else str(raw_value)
            if not value:
                emit(self.warn, "Property values must not be null or empty strings. Dropping property.")
                continue

            segments.append(f"&{escaped_key}={self.encode(value)}")

        return "".join(segments)


def properties_contain_timestamp(properties: Mapping[str, Any] | None) -> bool:
    """Check properties for both the ``_d`` and ``_t`` timestamp keys."""
    return properties is not None and all(key in properties for key in TIMESTAMP_KEYS)
