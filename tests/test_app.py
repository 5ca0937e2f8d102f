"""Tests for the process entry point."""

import logging

import pytest

import app as app_module


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logging.getLogger("shortlinks").handlers.clear()


class FakeServer:
    """Stands in for uvicorn.Server."""

    instances = []

    def __init__(self, config):
        self.config = config
        self.ran = False
        self.should_exit = False
        FakeServer.instances.append(self)

    def run(self):
        self.ran = True


class TestMain:

    def test_build_app_wires_lifespan(self, monkeypatch):
        monkeypatch.setenv("BASE_URL", "https://sho.rt")

        application = app_module.build_app()

        assert application.router.lifespan_context is app_module.lifespan
        assert application.state.config.base_url == "https://sho.rt"
        assert application.state.service is None

    def test_single_worker_runs_in_process(self, monkeypatch):
        monkeypatch.setenv("WORKERS", "1")
        monkeypatch.setattr(app_module.signal, "signal", lambda *args: None)
        monkeypatch.setattr(app_module.uvicorn, "Server", FakeServer)
        monkeypatch.setattr(app_module.uvicorn, "run", lambda *args, **kwargs: pytest.fail("forked"))
        FakeServer.instances.clear()

        app_module.main()

        assert len(FakeServer.instances) == 1
        assert FakeServer.instances[0].ran

    def test_multiple_workers_fork_through_factory(self, monkeypatch):
        monkeypatch.setenv("WORKERS", "3")
        monkeypatch.setattr(app_module.uvicorn, "Server", lambda *args: pytest.fail("ran in process"))
        calls = []
        monkeypatch.setattr(app_module.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))

        app_module.main()

        assert len(calls) == 1
        target, kwargs = calls[0]
        assert target == "app:build_app"
        assert kwargs["factory"] is True
        assert kwargs["workers"] == 3
