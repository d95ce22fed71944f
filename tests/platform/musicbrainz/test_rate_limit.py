"""Tests for the MusicBrainz request throttle."""

from __future__ import annotations

import pytest

from mbtagsync.platform.musicbrainz import rate_limit
from mbtagsync.platform.musicbrainz.rate_limit import RateLimiter


class _FakeTime:
    def __init__(self) -> None:
        self.now: float = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_time(monkeypatch: pytest.MonkeyPatch) -> _FakeTime:
    fake = _FakeTime()
    monkeypatch.setattr(rate_limit, "time", fake)
    return fake


def test_first_acquire_does_not_wait(fake_time: _FakeTime) -> None:
    RateLimiter(1.0).acquire()

    assert fake_time.sleeps == []


def test_consecutive_acquires_are_spaced(fake_time: _FakeTime) -> None:
    limiter = RateLimiter(1.0)

    limiter.acquire()
    fake_time.now = 0.3
    limiter.acquire()
    fake_time.now += 1.5
    limiter.acquire()

    assert fake_time.sleeps == [pytest.approx(0.7)]


def test_zero_interval_never_sleeps(fake_time: _FakeTime) -> None:
    limiter = RateLimiter(0.0)

    for _ in range(3):
        limiter.acquire()

    assert fake_time.sleeps == []
    assert limiter.min_interval == 0.0
