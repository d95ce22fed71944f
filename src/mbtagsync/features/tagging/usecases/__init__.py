"""Tagging use cases.

Exports the processor and scanner entry points together with their
collaborators and result types.
"""

from .extraction import IdentifierExtractor, IdKind
from .folder_scanner import FolderScanner
from .inventory_resolver import InventoryResolver
from .ports import (
    IdentifierResolverPort,
    IdentifierSourcePort,
    RefreshNotifierPort,
    ReleaseCatalogPort,
    TagFormatAdapter,
    TagWriterPort,
)
from .processing_types import (
    ProcessingEvent,
    RefreshSet,
    ScanSummary,
    TrackResult,
    WriteResult,
)
from .refresh_notifier import MetadataRefreshNotifier, RefreshReport
from .tag_writer import TagWriter
from .track_processor import TrackProcessor

__all__ = [
    "FolderScanner",
    "IdKind",
    "IdentifierExtractor",
    "IdentifierResolverPort",
    "IdentifierSourcePort",
    "InventoryResolver",
    "MetadataRefreshNotifier",
    "ProcessingEvent",
    "RefreshNotifierPort",
    "RefreshReport",
    "RefreshSet",
    "ReleaseCatalogPort",
    "ScanSummary",
    "TagFormatAdapter",
    "TagWriter",
    "TagWriterPort",
    "TrackProcessor",
    "TrackResult",
    "WriteResult",
]
