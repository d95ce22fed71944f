"""Where: src/mbtagsync/features/tagging/adapters/id3_adapter.py
What: ID3 adapter for MP3 files built on ``ffprobe`` and ``ffmpeg``.
Why: ffmpeg rewrites the tag block while stream-copying the audio, so one
     invocation applies every change.

The rewrite goes to a temporary file in the same directory which then
atomically replaces the original, keeping its permission bits; the temporary
file is removed on failure.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Final, cast

from mbtagsync.features.tagging.domain.tag_keys import desired_tag_map
from mbtagsync.platform.logging import logger
from mbtagsync.shared.errors import TagReadError, TagWriteError
from mbtagsync.shared.file_tags import FileTags, TagChangeSet

from .tool_runner import ToolRunner, run_tool

# ffmpeg metadata names for keys written as plain ``-metadata`` pairs.
_SIMPLE_FIELDS: Final[dict[str, str]] = {
    "ARTIST": "artist",
    "ALBUMARTIST": "album_artist",
    "GENRE": "genre",
    "DATE": "date",
    "YEAR": "year",
    "ORIGINALDATE": "originaldate",
    "ALBUM": "album",
    "TITLE": "title",
}

# Written as user-defined text frames named after the key.
_CUSTOM_FIELDS: Final[tuple[str, ...]] = ("ISRC", "TRACKTOTAL", "DISCTOTAL")

# ffprobe format tag (lower-cased) -> our key.
_PROBE_FIELDS: Final[dict[str, str]] = {
    "artist": "ARTIST",
    "album_artist": "ALBUMARTIST",
    "albumartist": "ALBUMARTIST",
    "genre": "GENRE",
    "date": "DATE",
    "tdrc": "DATE",
    "year": "YEAR",
    "tyer": "YEAR",
    "originaldate": "ORIGINALDATE",
    "tdor": "ORIGINALDATE",
    "tory": "ORIGINALYEAR",
    "originalyear": "ORIGINALYEAR",
    "original_year": "ORIGINALYEAR",
    "album": "ALBUM",
    "title": "TITLE",
    "isrc": "ISRC",
    "tsrc": "ISRC",
    "tracktotal": "TRACKTOTAL",
    "totaltracks": "TRACKTOTAL",
    "disctotal": "DISCTOTAL",
    "totaldiscs": "DISCTOTAL",
}


def _split_pair(value: str) -> tuple[str, str]:
    number, _, total = value.partition("/")
    return number.strip(), total.strip()


def map_probe_tags(raw_tags: dict[str, Any]) -> dict[str, list[str]]:
    """Translate ffprobe ``format.tags`` into upper-cased multi-valued tags."""

    existing: dict[str, list[str]] = {}

    def add(key: str, value: str) -> None:
        if value:
            existing.setdefault(key, []).append(value)

    for raw_key, raw_value in raw_tags.items():
        if not isinstance(raw_value, str):
            continue
        key = raw_key.strip().lower()
        key = key.removeprefix("txxx:")
        value = raw_value.strip()
        if key in ("track", "trck"):
            number, total = _split_pair(value)
            add("TRACKNUMBER", number)
            add("TRACKTOTAL", total)
        elif key in ("disc", "tpos"):
            number, total = _split_pair(value)
            add("DISCNUMBER", number)
            add("DISCTOTAL", total)
        elif key in _PROBE_FIELDS:
            add(_PROBE_FIELDS[key], value)
    return existing


class Id3FrameAdapter:
    """MP3 tag adapter backed by ``ffprobe`` (read) and ``ffmpeg`` (write)."""

    def __init__(
        self,
        ffmpeg_path: str = "ffmpeg",
        ffprobe_path: str = "ffprobe",
        runner: ToolRunner = run_tool,
    ) -> None:
        self.ffmpeg_path: str = ffmpeg_path
        self.ffprobe_path: str = ffprobe_path
        self._run: ToolRunner = runner

    def read_existing(self, file_path: Path) -> dict[str, list[str]]:
        result = self._run(
            [
                self.ffprobe_path,
                "-v",
                "quiet",
                "-print_format",
                "json",
                "-show_format",
                str(file_path),
            ],
            error_type=TagReadError,
        )
        try:
            document = json.loads(result.stdout or "{}")
        except json.JSONDecodeError as exc:
            raise TagReadError(f"ffprobe returned invalid JSON for {file_path}: {exc}") from exc

        if not isinstance(document, dict):
            return {}
        fmt = cast(dict[str, Any], document).get("format")
        if not isinstance(fmt, dict):
            return {}
        tags = cast(dict[str, Any], fmt).get("tags")
        if not isinstance(tags, dict):
            return {}
        return map_probe_tags(cast(dict[str, Any], tags))

    def desired_map(self, tags: FileTags) -> dict[str, str]:
        return desired_tag_map(tags)

    def build_command(self, file_path: Path, output_path: Path, change_set: TagChangeSet) -> list[str]:
        """Return the ffmpeg argument list writing ``change_set`` to ``output_path``."""

        args: list[str] = [
            self.ffmpeg_path,
            "-i",
            str(file_path),
            "-y",
            "-map_metadata",
            "0",
            "-codec",
            "copy",
            "-write_id3v1",
            "1",
            "-id3v2_version",
            "4",
        ]

        def meta(name: str, value: str) -> None:
            args.extend(["-metadata", f"{name}={value}"])

        for key, name in _SIMPLE_FIELDS.items():
            if key in change_set:
                meta(name, change_set[key])

        if "ORIGINALYEAR" in change_set:
            meta("TORY", change_set["ORIGINALYEAR"])
            meta("ORIGINALYEAR", change_set["ORIGINALYEAR"])

        desired = change_set.desired
        for composite, number_key, total_key in (
            ("track", "TRACKNUMBER", "TRACKTOTAL"),
            ("disc", "DISCNUMBER", "DISCTOTAL"),
        ):
            if number_key not in change_set and total_key not in change_set:
                continue
            number = desired.get(number_key, "")
            total = desired.get(total_key, "")
            if number and total:
                meta(composite, f"{number}/{total}")
            elif number:
                meta(composite, number)

        for key in _CUSTOM_FIELDS:
            if key in change_set:
                meta(key, change_set[key])

        args.append(str(output_path))
        return args

    def apply(self, file_path: Path, change_set: TagChangeSet) -> int:
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{file_path.stem}.",
            suffix=file_path.suffix,
            dir=file_path.parent,
        )
        os.close(fd)
        temp_path = Path(temp_name)
        try:
            _ = self._run(self.build_command(file_path, temp_path, change_set))
            try:
                # mkstemp creates the output owner-only; keep the original mode.
                shutil.copymode(file_path, temp_path)
                _ = temp_path.replace(file_path)
            except OSError as exc:
                raise TagWriteError(f"failed to replace {file_path}: {exc}") from exc
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug("Rewrote ID3 tags of %s (%d keys)", file_path, len(change_set))
        return len(change_set)


__all__ = ["Id3FrameAdapter", "map_probe_tags"]
