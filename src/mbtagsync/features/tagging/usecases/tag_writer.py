"""Where: src/mbtagsync/features/tagging/usecases/tag_writer.py
What: Plan and apply tag changes by dispatching on the file extension.
Why: The processor works with one writer regardless of container format.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from mbtagsync.features.tagging.domain.tag_diff import diff
from mbtagsync.shared.errors import UnsupportedFormatError
from mbtagsync.shared.file_tags import FileTags, TagChangeSet

from .ports import TagFormatAdapter
from .processing_types import WriteResult


class TagWriter:
    """Route diffing and writing to the adapter registered for an extension."""

    def __init__(self, adapters: Mapping[str, TagFormatAdapter]) -> None:
        self._adapters: dict[str, TagFormatAdapter] = {
            suffix.lower(): adapter for suffix, adapter in adapters.items()
        }

    def _adapter_for(self, file_path: Path) -> TagFormatAdapter:
        adapter = self._adapters.get(file_path.suffix.lower())
        if adapter is None:
            raise UnsupportedFormatError(f"no tag writer for {file_path.suffix or file_path.name}")
        return adapter

    def plan(self, file_path: Path, tags: FileTags) -> TagChangeSet:
        adapter = self._adapter_for(file_path)
        existing = adapter.read_existing(file_path)
        return diff(existing, adapter.desired_map(tags))

    def write(self, file_path: Path, change_set: TagChangeSet) -> WriteResult:
        """Apply ``change_set``; returns ``unchanged`` without I/O when it is empty."""

        if not change_set:
            return WriteResult(unchanged=True, tags_written=0)
        adapter = self._adapter_for(file_path)
        written = adapter.apply(file_path, change_set)
        return WriteResult(unchanged=False, tags_written=written)


__all__ = ["TagWriter"]
