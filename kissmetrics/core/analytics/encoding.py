"""Percent-encoding in the wire format expected by the KISSmetricsAPI.

The tracking endpoints decode values the way the mobile SDKs encode them:
alphanumerics and ``-_.~`` are literal, a space is ``%20`` (never ``+``),
``*`` is ``%2A`` and everything else is a ``%XX`` triplet of its UTF-8 bytes.
"""

from __future__ import annotations

from urllib.parse import quote_plus

from kissmetrics.core.analytics.diagnostics import WarningSink, emit

ENCODING = "utf-8"

# Applied in order to the generic form encoding
WIRE_SUBSTITUTIONS = (
    ("*", "%2A"),
    ("%7E", "~"),
    ("+", "%20"),
)


def encode(value: str, warn: WarningSink | None = None) -> str:
    """URL encode a string for use in a query.

    Args:
        value: Unencoded string
        warn: Diagnostic sink, defaults to issuing a ``KISSmetricsWarning``

    Returns:
        The encoded string, or an empty string if ``value`` cannot be
        represented in UTF-8

    """
    try:
        url = quote_plus(value, safe="*", encoding=ENCODING, errors="strict")
    except UnicodeEncodeError:
        emit(warn, f"Unable to url encode string:{value!r}")
        return ""

    # Form encoding leaves * literal and writes spaces as +
    for old, new in WIRE_SUBSTITUTIONS:
        url = url.replace(old, new)
    return url
