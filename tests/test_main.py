"""Smoke tests for unified entry points.

These tests assert that `python -m mbtagsync` and the console script
both resolve to the CLI's `main` function exposed under `mbtagsync.ui.cli`.
"""

from importlib import import_module


def test_module_entry_point_exposes_main() -> None:
    """`python -m mbtagsync` path exposes a `main` callable."""
    m = import_module("mbtagsync.__main__")
    assert hasattr(m, "main")


def test_console_script_target_exposes_main() -> None:
    """Console script points to `mbtagsync.ui.cli:main` and is importable."""
    m = import_module("mbtagsync.ui.cli")
    assert hasattr(m, "main")
