"""Runtime collectors for default client identification."""

from __future__ import annotations

import platform
from pathlib import Path

from kissmetrics import __version__ as kissmetrics_version
from kissmetrics.core.analytics.encoding import encode

CLIENT_TYPE_PREFIX = "py"
USER_AGENT_PRODUCT = "kissmetrics-python"


def get_client_type() -> str:
    """Get the client identifier sent as ``_c``, e.g. ``py-2.0.0``."""
    return f"{CLIENT_TYPE_PREFIX}-{kissmetrics_version}"


def get_python_version() -> str:
    """Get the running Python version as ``major.minor``."""
    major, minor, _ = platform.python_version_tuple()
    return f"{major}.{minor}"


def _try_freedesktop_os_release() -> str | None:
    """Try to get Linux info using platform.freedesktop_os_release()."""
    if not hasattr(platform, "freedesktop_os_release"):
        return None

    try:
        os_info = platform.freedesktop_os_release()
        name = os_info.get("PRETTY_NAME", "")
        if name:
            return name
        name = os_info.get("NAME", "Linux")
        version = os_info.get("VERSION_ID", "")
        if version:
            return f"{name} {version}"
    except OSError:
        pass
    return None


def _try_os_release_file() -> str | None:
    """Try to get Linux info from /etc/os-release file."""
    try:
        os_release_path = Path("/etc/os-release")
        if os_release_path.exists():
            with os_release_path.open() as f:
                for line in f:
                    if line.startswith("PRETTY_NAME="):
                        return line.split("=", 1)[1].strip().strip('"')
    except OSError:
        pass
    return None


def get_os_info() -> str:
    """Get a readable OS name including its version."""
    system = platform.system()

    if system == "Linux":
        return _try_freedesktop_os_release() or _try_os_release_file() or "Linux"

    if system == "Darwin":
        version = platform.mac_ver()[0]
        if version:
            return f"macOS {version}"
        return "macOS"

    if system == "Windows":
        release = platform.release()
        if release:
            return f"Windows {release}"
        return "Windows"

    if not system:
        return "Unknown"
    return f"{system} {platform.release()}".strip()


def get_user_agent() -> str:
    """Build the default user agent sent as ``_u``.

    The agent is emitted into queries verbatim, so it is returned already
    percent-encoded.

    Returns:
        Encoded agent such as ``kissmetrics-python/2.0.0 (Python 3.12; Ubuntu 22.04.3 LTS)``

    """
    agent = f"{USER_AGENT_PRODUCT}/{kissmetrics_version} (Python {get_python_version()}; {get_os_info()})"
    return encode(agent)
