"""Tagging feature: identifier recovery, tag reconciliation and refresh queueing."""

from .usecases import (
    FolderScanner,
    IdentifierExtractor,
    InventoryResolver,
    MetadataRefreshNotifier,
    ScanSummary,
    TagWriter,
    TrackProcessor,
    TrackResult,
)

__all__ = [
    "FolderScanner",
    "IdentifierExtractor",
    "InventoryResolver",
    "MetadataRefreshNotifier",
    "ScanSummary",
    "TagWriter",
    "TrackProcessor",
    "TrackResult",
]
