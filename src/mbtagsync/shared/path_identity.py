"""
Summary: Derive artist/album/medium/file identity from a path under a library root.
Why: Inventory matching relies on the folder layout when embedded identifiers are missing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePath

from .canonical import normalize_tag_value
from .errors import ResolutionError

_STEP = "path identity"
_MIN_SEGMENTS = 3


@dataclass(frozen=True, slots=True)
class PathIdentity:
    """Segments of ``<root>/<artist>/<album>[/<medium>]/<file>``."""

    artist: str
    album: str
    file_name: str
    medium: str | None = None


def _relative_parts(library_root: Path | str, file_path: Path | str) -> tuple[str, ...]:
    root = PurePath(os.path.normpath(os.path.abspath(library_root)))
    target = PurePath(os.path.normpath(os.path.abspath(file_path)))
    if target == root or not target.is_relative_to(root):
        raise ResolutionError(_STEP, f"path {str(file_path)!r} is not under root {str(library_root)!r}")
    return target.relative_to(root).parts


def derive_path_identity(library_root: Path | str, file_path: Path | str) -> PathIdentity:
    """Split ``file_path`` relative to ``library_root`` into a ``PathIdentity``.

    Args:
        library_root: Configured library root directory.
        file_path: Track file somewhere below the root.

    Returns:
        PathIdentity: Normalised (NFC, trimmed) path segments.

    Raises:
        ResolutionError: The path is the root itself, lies outside it, has fewer
            than three segments, or its final segment has no extension.
    """

    parts = _relative_parts(library_root, file_path)
    relative = "/".join(parts)
    if len(parts) < _MIN_SEGMENTS:
        raise ResolutionError(
            _STEP,
            f"relative path {relative!r} too short; need artist/album/track or artist/album/medium/track",
        )
    if not PurePath(parts[-1]).suffix:
        raise ResolutionError(_STEP, f"last segment {parts[-1]!r} is not a file in {relative!r}")

    segments = [normalize_tag_value(part) for part in parts]
    if not segments[0] or not segments[1]:
        raise ResolutionError(_STEP, f"empty artist or album segment in {relative!r}")

    medium = segments[2] if len(segments) >= 4 else None
    return PathIdentity(
        artist=segments[0],
        album=segments[1],
        file_name=segments[-1],
        medium=medium or None,
    )


__all__ = ["PathIdentity", "derive_path_identity"]
