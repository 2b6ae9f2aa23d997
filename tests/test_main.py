# tests/test_main.py
import uvicorn

from market import __main__ as entry
from market.core.config import settings


def test_main_runs_app_with_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    entry.main()

    assert calls == [
        (
            ("market.main:app",),
            {"host": settings.HOST, "port": settings.PORT, "log_level": settings.LOG_LEVEL.lower()},
        )
    ]
