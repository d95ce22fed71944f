"""Where: src/mbtagsync/platform/musicbrainz/user_agent.py
What: Build MusicBrainz-compliant User-Agent strings.
Why: Centralise etiquette logic shared by the catalog client and its tests.
"""

from __future__ import annotations

import os

_ENV_USER_AGENT = "MUSICBRAINZ_USER_AGENT"


def format_user_agent(app_name: str, app_version: str, contact: str) -> str:
    """Return ``App/Version (contact)`` when contact information is available."""

    stripped = contact.strip()
    if stripped:
        return f"{app_name}/{app_version} ({stripped})"
    return f"{app_name}/{app_version}"


def resolve_user_agent(app_name: str, app_version: str, contact: str) -> str:
    """Prefer an explicit ``MUSICBRAINZ_USER_AGENT`` over the configured identity."""

    env = os.getenv(_ENV_USER_AGENT, "").strip()
    if env:
        return env
    return format_user_agent(app_name, app_version, contact)


__all__ = ["format_user_agent", "resolve_user_agent"]
