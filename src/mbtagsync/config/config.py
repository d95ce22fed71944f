"""Configuration management for mbtagsync.

Where: src/mbtagsync/config/config.py
What: Load the TOML configuration into typed, validated dataclasses.
Why: Keep remote-service credentials, cache lifetimes and tagging policy in one
     place so the composition root never parses files itself.
"""

from __future__ import annotations

import textwrap
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

from mbtagsync.config.file_ops import ensure_file_with_template
from mbtagsync.config.paths import (
    ENV_CONFIG_PATH,
    default_cache_dir,
    default_config_path,
    resolve_overridable_path,
)
from mbtagsync.config.settings import LIDARR_CACHE_TTL, MB_RELEASE_CACHE_TTL, PLEX_CACHE_TTL
from mbtagsync.platform.logging import logger

ARTIST_CREDIT_MODES: tuple[str, ...] = ("credited", "canonical")

_RELEASE_CACHE_HOURS = MB_RELEASE_CACHE_TTL.total_seconds() / 3600
_LIDARR_CACHE_MINUTES = LIDARR_CACHE_TTL.total_seconds() / 60
_PLEX_CACHE_MINUTES = PLEX_CACHE_TTL.total_seconds() / 60

_TEMPLATE = textwrap.dedent(
    """
    # mbtagsync configuration file (TOML)

    # Library roots scanned by `mbtagsync scan` when no root is given.
    # Files must sit under <root>/<artist>/<album>[/<medium>]/<file>.
    library_roots = []

    # Log file path (optional)
    # log_file = "/path/to/logs/mbtagsync.log"

    [musicbrainz]
    # MusicBrainz asks for "AppName/AppVersion (contact)" as User-Agent.
    app_name = "mbtagsync"
    app_version = "0.1.0"
    contact = ""
    rate_limit_seconds = 1.0
    release_cache_hours = 168

    [lidarr]
    # Fallback identifier resolution; disabled while url or api_key is empty.
    url = ""
    api_key = ""
    # Optional Cookie header for instances behind an authenticating proxy.
    cookie = ""
    cache_minutes = 60

    [plex]
    # Album refresh after tagging; disabled while url or token is empty.
    url = ""
    token = ""
    cache_minutes = 60

    [tagging]
    # "credited" keeps the name as credited on the track, "canonical" uses
    # the artist's own name.
    artist_credit = "credited"
    # When non-empty, replaces the catalog join phrases between artists.
    artist_delimiter = ""
    write_genre = false

    [cache]
    # directory = "/path/to/cache"
    """
).strip() + "\n"


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the TOML document cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the parsed document is semantically invalid."""


@dataclass(slots=True)
class MusicBrainzSettings:
    """Catalog identity, throttling and cache lifetime."""

    app_name: str = "mbtagsync"
    app_version: str = "0.1.0"
    contact: str = ""
    base_url: str = "https://musicbrainz.org/ws/2"
    rate_limit_seconds: float = 1.0
    release_cache_hours: float = _RELEASE_CACHE_HOURS
    timeout_seconds: float = 15.0


@dataclass(slots=True)
class LidarrSettings:
    """Inventory service connection."""

    url: str = ""
    api_key: str = ""
    cookie: str = ""
    cache_minutes: float = _LIDARR_CACHE_MINUTES
    timeout_seconds: float = 15.0

    @property
    def enabled(self) -> bool:
        return bool(self.url.strip() and self.api_key.strip())


@dataclass(slots=True)
class PlexSettings:
    """Media-index service connection."""

    url: str = ""
    token: str = ""
    cache_minutes: float = _PLEX_CACHE_MINUTES
    timeout_seconds: float = 10.0

    @property
    def enabled(self) -> bool:
        return bool(self.url.strip() and self.token.strip())


@dataclass(slots=True)
class TaggingSettings:
    """Tag derivation policy and external tool locations."""

    artist_credit: str = "credited"
    artist_delimiter: str = ""
    write_genre: bool = False
    metaflac_path: str = "metaflac"
    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"


@dataclass(slots=True)
class AppConfig:
    """Application configuration."""

    library_roots: list[Path] = field(default_factory=list)
    log_file: Path | None = None
    cache_dir: Path = field(default_factory=default_cache_dir)
    musicbrainz: MusicBrainzSettings = field(default_factory=MusicBrainzSettings)
    lidarr: LidarrSettings = field(default_factory=LidarrSettings)
    plex: PlexSettings = field(default_factory=PlexSettings)
    tagging: TaggingSettings = field(default_factory=TaggingSettings)
    source_path: Path | None = None


def load_config(
    *, path: Path | None = None, env: Mapping[str, str] | None = None
) -> AppConfig:
    """Load configuration from the TOML file.

    Args:
        path: Optional explicit path to the configuration file.
        env: Optional environment mapping to read overrides from.

    Returns:
        AppConfig: Loaded configuration (defaults when the file was just created).

    Raises:
        ConfigParseError: The file is not valid TOML.
        ConfigValidationError: A value has the wrong type or range.
    """

    resolved_path = resolve_overridable_path(
        explicit_path=path,
        env=env,
        env_var=ENV_CONFIG_PATH,
        default_factory=default_config_path,
    )
    if ensure_file_with_template(resolved_path, template_provider=lambda: _TEMPLATE):
        logger.info("Created default configuration at %s", resolved_path)

    try:
        with resolved_path.open("rb") as handle:
            document = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigParseError(f"Invalid TOML in configuration file: {resolved_path}") from exc
    except OSError as exc:  # pragma: no cover - rare filesystem failure
        raise ConfigError(f"Failed to read configuration file: {resolved_path}") from exc

    config = parse_config(document)
    config.source_path = resolved_path
    logger.info("Configuration loaded from %s", resolved_path)
    return config


def parse_config(document: Mapping[str, Any]) -> AppConfig:
    """Build an ``AppConfig`` from an already-decoded TOML mapping."""

    roots_raw = document.get("library_roots", [])
    if not isinstance(roots_raw, list):
        raise ConfigValidationError("library_roots must be a list of paths")
    library_roots: list[Path] = []
    for entry in cast(list[object], roots_raw):
        if not isinstance(entry, str) or not entry.strip():
            raise ConfigValidationError("library_roots entries must be non-empty strings")
        library_roots.append(Path(entry).expanduser())

    log_file_raw = document.get("log_file")
    if log_file_raw is not None and not isinstance(log_file_raw, str):
        raise ConfigValidationError("log_file must be a string")
    log_file = Path(log_file_raw).expanduser() if log_file_raw else None

    mb = _table(document, "musicbrainz")
    lidarr = _table(document, "lidarr")
    plex = _table(document, "plex")
    tagging = _table(document, "tagging")
    cache = _table(document, "cache")

    musicbrainz_settings = MusicBrainzSettings(
        app_name=_string(mb, "app_name", "musicbrainz", "mbtagsync") or "mbtagsync",
        app_version=_string(mb, "app_version", "musicbrainz", "0.1.0") or "0.1.0",
        contact=_string(mb, "contact", "musicbrainz", ""),
        base_url=_string(mb, "base_url", "musicbrainz", "https://musicbrainz.org/ws/2"),
        rate_limit_seconds=_number(mb, "rate_limit_seconds", "musicbrainz", 1.0),
        release_cache_hours=_positive(mb, "release_cache_hours", "musicbrainz", _RELEASE_CACHE_HOURS),
        timeout_seconds=_positive(mb, "timeout_seconds", "musicbrainz", 15.0),
    )
    lidarr_settings = LidarrSettings(
        url=_string(lidarr, "url", "lidarr", ""),
        api_key=_string(lidarr, "api_key", "lidarr", ""),
        cookie=_string(lidarr, "cookie", "lidarr", ""),
        cache_minutes=_positive(lidarr, "cache_minutes", "lidarr", _LIDARR_CACHE_MINUTES),
        timeout_seconds=_positive(lidarr, "timeout_seconds", "lidarr", 15.0),
    )
    plex_settings = PlexSettings(
        url=_string(plex, "url", "plex", ""),
        token=_string(plex, "token", "plex", ""),
        cache_minutes=_positive(plex, "cache_minutes", "plex", _PLEX_CACHE_MINUTES),
        timeout_seconds=_positive(plex, "timeout_seconds", "plex", 10.0),
    )

    artist_credit = _string(tagging, "artist_credit", "tagging", "credited").lower()
    if artist_credit not in ARTIST_CREDIT_MODES:
        raise ConfigValidationError(
            f"tagging.artist_credit must be one of {', '.join(ARTIST_CREDIT_MODES)}"
        )
    write_genre = tagging.get("write_genre", False)
    if not isinstance(write_genre, bool):
        raise ConfigValidationError("tagging.write_genre must be a boolean")
    tagging_settings = TaggingSettings(
        artist_credit=artist_credit,
        artist_delimiter=_string(tagging, "artist_delimiter", "tagging", "", strip=False),
        write_genre=write_genre,
        metaflac_path=_string(tagging, "metaflac_path", "tagging", "metaflac") or "metaflac",
        ffmpeg_path=_string(tagging, "ffmpeg_path", "tagging", "ffmpeg") or "ffmpeg",
        ffprobe_path=_string(tagging, "ffprobe_path", "tagging", "ffprobe") or "ffprobe",
    )

    cache_dir_raw = _string(cache, "directory", "cache", "")
    cache_dir = Path(cache_dir_raw).expanduser() if cache_dir_raw else default_cache_dir()

    return AppConfig(
        library_roots=library_roots,
        log_file=log_file,
        cache_dir=cache_dir,
        musicbrainz=musicbrainz_settings,
        lidarr=lidarr_settings,
        plex=plex_settings,
        tagging=tagging_settings,
    )


def _table(document: Mapping[str, Any], section: str) -> dict[str, Any]:
    value = document.get(section, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigValidationError(f"{section} section must be a table")
    return cast(dict[str, Any], value)


def _string(
    table: Mapping[str, Any], key: str, section: str, default: str, *, strip: bool = True
) -> str:
    value = table.get(key, default)
    if not isinstance(value, str):
        raise ConfigValidationError(f"{section}.{key} must be a string")
    return value.strip() if strip else value


def _number(table: Mapping[str, Any], key: str, section: str, default: float) -> float:
    value = table.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigValidationError(f"{section}.{key} must be a number")
    if value < 0:
        raise ConfigValidationError(f"{section}.{key} must not be negative")
    return float(value)


def _positive(table: Mapping[str, Any], key: str, section: str, default: float) -> float:
    value = _number(table, key, section, default)
    if value <= 0:
        raise ConfigValidationError(f"{section}.{key} must be greater than zero")
    return value


__all__ = [
    "ARTIST_CREDIT_MODES",
    "AppConfig",
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    "LidarrSettings",
    "MusicBrainzSettings",
    "PlexSettings",
    "TaggingSettings",
    "load_config",
    "parse_config",
]
