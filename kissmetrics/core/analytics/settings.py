"""Encoder configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from kissmetrics.core.analytics.collectors import get_client_type, get_user_agent

ENV_API_KEY = "KISSMETRICS_API_KEY"
ENV_CLIENT_TYPE = "KISSMETRICS_CLIENT_TYPE"
ENV_USER_AGENT = "KISSMETRICS_USER_AGENT"


@dataclass(frozen=True)
class EncoderSettings:
    """Static configuration stamped onto every query.

    The values are operator supplied and emitted into queries without
    encoding, so they must not contain characters unsafe in a URL query.
    """

    key: str
    client_type: str
    user_agent: str

    @classmethod
    def from_env(
        cls,
        key: str | None = None,
        client_type: str | None = None,
        user_agent: str | None = None,
    ) -> EncoderSettings:
        """Resolve settings from arguments, then environment, then runtime defaults.

        Args:
            key: KISSmetrics product key
            client_type: Client identifier and version string
            user_agent: User agent string

        Returns:
            The resolved settings

        Raises:
            ValueError: If no product key is given or set in the environment

        """
        key = key or os.getenv(ENV_API_KEY)
        if not key:
            raise ValueError(f"A KISSmetrics product key is required (pass key= or set {ENV_API_KEY})")

        return cls(
            key=key,
            client_type=client_type or os.getenv(ENV_CLIENT_TYPE) or get_client_type(),
            user_agent=user_agent or os.getenv(ENV_USER_AGENT) or get_user_agent(),
        )
