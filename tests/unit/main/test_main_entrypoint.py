from __future__ import annotations

import runpy

from memguard.main import server


def test_main_module_invokes_server(monkeypatch):
    executed = {}

    def fake_main() -> None:
        executed["called"] = True

    monkeypatch.setattr("memguard.main.server.main", fake_main)

    runpy.run_module("memguard.main.__main__", run_name="__main__")

    assert executed["called"] is True


def test_server_runs_uvicorn_with_settings(monkeypatch):
    captured = {}

    def fake_run(app, **kwargs) -> None:
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setenv("APP_HOST", "127.0.0.1")
    monkeypatch.setenv("APP_PORT", "9191")
    monkeypatch.setattr(server.uvicorn, "run", fake_run)

    server.main()

    assert captured["app"] == "memguard.main.app:app"
    assert captured["host"] == "127.0.0.1"
    assert captured["port"] == 9191
