"""Tests for the gunicorn deployment settings."""
import runpy
from pathlib import Path

CONF = Path(__file__).resolve().parent.parent / "gunicorn.conf.py"


def test_defaults_to_single_uvicorn_worker(monkeypatch):
    monkeypatch.delenv("WEB_CONCURRENCY", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    conf = runpy.run_path(str(CONF))
    assert conf["worker_class"] == "uvicorn.workers.UvicornWorker"
    assert conf["workers"] == 1
    assert conf["bind"] == "0.0.0.0:8000"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WEB_CONCURRENCY", "4")
    monkeypatch.setenv("PORT", "9000")
    conf = runpy.run_path(str(CONF))
    assert conf["workers"] == 4
    assert conf["bind"] == "0.0.0.0:9000"
