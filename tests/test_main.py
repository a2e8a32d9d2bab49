from __future__ import annotations

from typing import Any

import pytest

import main as main_module


def test_main_runs_uvicorn_with_settings_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9090")
    calls: list[tuple[str, dict[str, Any]]] = []
    monkeypatch.setattr(main_module.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    main_module.main([])

    assert calls == [("api.app:app", {"host": "0.0.0.0", "port": 9090, "log_level": "info"})]


def test_main_cli_overrides_port(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(main_module.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

    main_module.main(["--host", "127.0.0.1", "--port", "8000", "--log-level", "DEBUG"])

    assert calls == [{"host": "127.0.0.1", "port": 8000, "log_level": "debug"}]
