"""Where: src/mbtagsync/platform/plex/models.py
What: Decode Plex ``MediaContainer`` XML into directory and track records.
Why: Plex answers library queries in XML; only a handful of attributes matter here.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass


class PlexPayloadError(ValueError):
    """Raised when a Plex response is not a parseable ``MediaContainer``."""


@dataclass(frozen=True, slots=True)
class PlexDirectory:
    """Library section, artist or album entry."""

    key: str
    title: str
    type: str
    parent_title: str = ""


@dataclass(frozen=True, slots=True)
class PlexTrack:
    """Track entry returned by ``type=10`` searches."""

    key: str
    title: str
    parent_title: str
    grandparent_title: str
    parent_key: str = ""
    parent_rating_key: str = ""


@dataclass(frozen=True, slots=True)
class PlexMediaContainer:
    directories: tuple[PlexDirectory, ...] = ()
    tracks: tuple[PlexTrack, ...] = ()


@dataclass(frozen=True, slots=True)
class PlexIdentity:
    machine_identifier: str = ""
    version: str = ""
    friendly_name: str = ""


def _parse_root(text: str) -> ET.Element:
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        raise PlexPayloadError(f"invalid XML: {exc}") from exc


def parse_media_container(text: str) -> PlexMediaContainer:
    root = _parse_root(text)
    if root.tag != "MediaContainer":
        raise PlexPayloadError(f"expected MediaContainer, got {root.tag}")

    directories = tuple(
        PlexDirectory(
            key=node.get("key", ""),
            title=node.get("title", ""),
            type=node.get("type", ""),
            parent_title=node.get("parentTitle", ""),
        )
        for node in root.findall("Directory")
    )
    tracks = tuple(
        PlexTrack(
            key=node.get("key", ""),
            title=node.get("title", ""),
            parent_title=node.get("parentTitle", ""),
            grandparent_title=node.get("grandparentTitle", ""),
            parent_key=node.get("parentKey", ""),
            parent_rating_key=node.get("parentRatingKey", ""),
        )
        for node in root.findall("Track")
    )
    return PlexMediaContainer(directories=directories, tracks=tracks)


def parse_identity(text: str) -> PlexIdentity:
    root = _parse_root(text)
    return PlexIdentity(
        machine_identifier=root.get("machineIdentifier", ""),
        version=root.get("version", ""),
        friendly_name=root.get("friendlyName", ""),
    )


def normalize_album_key(key: str) -> str:
    """``/library/metadata/1/children`` -> ``/library/metadata/1``."""

    key = key.strip()
    return key.removesuffix("/children")


__all__ = [
    "PlexDirectory",
    "PlexIdentity",
    "PlexMediaContainer",
    "PlexPayloadError",
    "PlexTrack",
    "normalize_album_key",
    "parse_identity",
    "parse_media_container",
]
