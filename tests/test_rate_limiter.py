from __future__ import annotations

import pytest
from fastapi import HTTPException

from kardme.core import rate_limiter
from kardme.core.rate_limiter import _RateLimiter


def _clock(monkeypatch, start: float):
    now = {"value": start}
    monkeypatch.setattr(rate_limiter.time, "time", lambda: now["value"])
    return now


def test_limit_is_enforced_within_window(monkeypatch):
    _clock(monkeypatch, 1000.0)
    limiter = _RateLimiter()
    limiter.check("cards:theme:1.2.3.4", 2, 60)
    limiter.check("cards:theme:1.2.3.4", 2, 60)
    with pytest.raises(HTTPException) as exc:
        limiter.check("cards:theme:1.2.3.4", 2, 60)
    assert exc.value.status_code == 429


def test_expired_windows_are_pruned(monkeypatch):
    now = _clock(monkeypatch, 1000.0)
    limiter = _RateLimiter()
    for ip in range(50):
        limiter.check(f"cards:theme:10.0.0.{ip}", 5, 60)
    assert len(limiter) == 50

    now["value"] = 1061.0
    limiter.check("cards:theme:10.0.1.1", 5, 60)
    assert len(limiter) == 1


def test_new_window_resets_count(monkeypatch):
    now = _clock(monkeypatch, 1000.0)
    limiter = _RateLimiter()
    limiter.check("k", 1, 60)
    now["value"] = 1061.0
    limiter.check("k", 1, 60)
