"""Where: src/mbtagsync/features/tagging/adapters/tool_runner.py
What: Run external tag tools (metaflac, ffmpeg, ffprobe) with a UTF-8 locale.
Why: Both container adapters shell out and must report failures the same way.
"""

from __future__ import annotations

import os
import subprocess  # nosec B404 - external tag tools are invoked by design
from collections.abc import Sequence
from typing import Protocol

from mbtagsync.config.settings import UTF8_LOCALE_ENV
from mbtagsync.platform.logging import logger
from mbtagsync.shared.errors import TaggingError, TagWriteError


class ToolRunner(Protocol):
    def __call__(
        self,
        command: Sequence[str],
        *,
        error_type: type[TaggingError] = TagWriteError,
    ) -> subprocess.CompletedProcess[str]:
        ...


def run_tool(
    command: Sequence[str],
    *,
    error_type: type[TaggingError] = TagWriteError,
) -> subprocess.CompletedProcess[str]:
    """Run ``command`` to completion and return its captured output.

    Raises:
        TaggingError: ``error_type`` when the tool cannot be started or exits
            with a non-zero status.
    """

    args = [str(part) for part in command]
    env = {**os.environ, **UTF8_LOCALE_ENV}
    logger.debug("Running %s", " ".join(args))
    try:
        result = subprocess.run(  # nosec B603 - argument list, no shell
            args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=env,
            check=False,
        )
    except (subprocess.SubprocessError, OSError) as exc:
        raise error_type(f"{args[0]} could not be executed: {exc}") from exc

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise error_type(f"{args[0]} exited with status {result.returncode}: {stderr}")
    return result


__all__ = ["ToolRunner", "run_tool"]
