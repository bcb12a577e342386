"""Advisory diagnostics emitted while encoding queries."""

from __future__ import annotations

import warnings
from typing import Callable

WarningSink = Callable[[str], None]


class KISSmetricsWarning(UserWarning):
    """Advisory message about data dropped or degraded during encoding."""


def warn_sink(message: str) -> None:
    """Default diagnostic sink: issue a ``KISSmetricsWarning``."""
    warnings.warn(message, KISSmetricsWarning, stacklevel=3)


def emit(sink: WarningSink | None, message: str) -> None:
    """Deliver a diagnostic to ``sink`` without ever failing the caller.

    Args:
        sink: Callable receiving the message, or None for the default sink
        message: Human readable diagnostic

    """
    try:
        (sink or warn_sink)(message)
    except Exception:  # noqa: BLE001
        # A broken sink must not block the send pipeline
        pass
