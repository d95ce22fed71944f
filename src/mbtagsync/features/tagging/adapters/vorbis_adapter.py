"""Where: src/mbtagsync/features/tagging/adapters/vorbis_adapter.py
What: Vorbis comment adapter for FLAC files.
Why: Read current comments with mutagen and rewrite changed keys through ``metaflac``.

Each changed key costs two ``metaflac`` calls: remove every instance, then
set the single new value. A failure stops the file; keys already written
stay written.
"""

from __future__ import annotations

from pathlib import Path

from mutagen._util import MutagenError
from mutagen.flac import FLAC

from mbtagsync.features.tagging.domain.tag_keys import desired_tag_map
from mbtagsync.shared.errors import TagReadError
from mbtagsync.shared.file_tags import FileTags, TagChangeSet

from .tool_runner import ToolRunner, run_tool


class VorbisCommentAdapter:
    """FLAC tag adapter backed by ``metaflac``."""

    def __init__(self, metaflac_path: str = "metaflac", runner: ToolRunner = run_tool) -> None:
        self.metaflac_path: str = metaflac_path
        self._run: ToolRunner = runner

    def read_existing(self, file_path: Path) -> dict[str, list[str]]:
        try:
            audio = FLAC(file_path)
        except (MutagenError, OSError) as exc:
            raise TagReadError(f"failed to read FLAC tags from {file_path}: {exc}") from exc

        tags = audio.tags
        if tags is None:
            return {}
        existing: dict[str, list[str]] = {}
        for key in tags.keys():
            existing.setdefault(key.upper(), []).extend(str(value) for value in tags[key])
        return existing

    def desired_map(self, tags: FileTags) -> dict[str, str]:
        return desired_tag_map(tags, include_release_date=True)

    def apply(self, file_path: Path, change_set: TagChangeSet) -> int:
        written = 0
        for key, value in change_set.items():
            _ = self._run([self.metaflac_path, f"--remove-tag={key}", str(file_path)])
            _ = self._run([self.metaflac_path, "--set-tag", f"{key}={value}", str(file_path)])
            written += 1
        return written


__all__ = ["VorbisCommentAdapter"]
