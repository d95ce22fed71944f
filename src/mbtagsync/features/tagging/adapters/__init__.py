"""Container-specific tag adapters driving external tools."""

from .id3_adapter import Id3FrameAdapter, map_probe_tags
from .tool_runner import ToolRunner, run_tool
from .vorbis_adapter import VorbisCommentAdapter

__all__ = [
    "Id3FrameAdapter",
    "ToolRunner",
    "VorbisCommentAdapter",
    "map_probe_tags",
    "run_tool",
]
