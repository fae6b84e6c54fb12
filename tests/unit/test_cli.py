"""Tests for the command-line entry point."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI

from seedsift import __version__
from seedsift.cli import build_parser, main


@pytest.fixture
def run() -> Iterator[MagicMock]:
    """Patch out the server, the port check and logging setup."""
    with (
        patch("uvicorn.run") as uvicorn_run,
        patch("seedsift.cli._check_port") as check_port,
        patch("seedsift.observability.logging.setup_logging"),
    ):
        uvicorn_run.check_port = check_port
        yield uvicorn_run


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SEEDSIFT_CONFIG", raising=False)
    monkeypatch.setenv("SEEDSIFT_HISTORY__FILE", str(tmp_path / "history.json"))


class TestParser:
    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.config is None
        assert args.fallback is None
        assert args.reload is False

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out


class TestMain:
    def test_runs_app_instance_with_overrides(self, run: MagicMock) -> None:
        main(["--host", "127.0.0.1", "--port", "9999", "--adapter", "nyaa", "--fallback", "", "--log-level", "debug"])

        run.check_port.assert_called_once_with("127.0.0.1", 9999)
        app = run.call_args.args[0]
        assert isinstance(app, FastAPI)
        assert run.call_args.kwargs["port"] == 9999
        assert run.call_args.kwargs["log_level"] == "debug"

    def test_reload_uses_factory(self, run: MagicMock, tmp_path: Path) -> None:
        config = tmp_path / "seedsift.yaml"
        config.write_text("server:\n  port: 4000\n")

        main(["--config", str(config), "--reload"])

        assert run.call_args.args[0] == "seedsift.api.app:create_app"
        assert run.call_args.kwargs["factory"] is True
        assert run.call_args.kwargs["port"] == 4000
        assert run.call_args.kwargs["workers"] == 1

    def test_missing_config_exits(self, run: MagicMock, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(tmp_path / "nope.yaml")])
        assert exc_info.value.code == 1
        run.assert_not_called()
