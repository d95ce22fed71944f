"""Lidarr inventory service integration."""

from .client import LidarrClient, LidarrError
from .models import (
    LidarrAlbum,
    LidarrArtist,
    LidarrPayloadError,
    LidarrRelease,
    LidarrTrack,
    LidarrTrackFile,
)

__all__ = [
    "LidarrAlbum",
    "LidarrArtist",
    "LidarrClient",
    "LidarrError",
    "LidarrPayloadError",
    "LidarrRelease",
    "LidarrTrack",
    "LidarrTrackFile",
]
