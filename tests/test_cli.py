from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from globe_search import cli
from globe_search.app import SearchApp
from globe_search.exceptions import AssetLoadError


@pytest.fixture
def uvicorn_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []

    def fake_run(app: Any, **kwargs: Any) -> None:
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    for name in ("PORT", "GLOBE_SEARCH_PORT", "GLOBE_SEARCH_HOST", "GLOBE_SEARCH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return calls


def test_starts_server_with_defaults(uvicorn_calls: list[dict[str, Any]]):
    result = CliRunner().invoke(cli.main, [])

    assert result.exit_code == 0, result.output
    [call] = uvicorn_calls
    assert isinstance(call["app"], SearchApp)
    assert call["port"] == 8787
    assert call["host"] == "0.0.0.0"


def test_options_override_environment(uvicorn_calls: list[dict[str, Any]], monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PORT", "9000")

    result = CliRunner().invoke(cli.main, ["--port", "9001", "--host", "127.0.0.1", "--log-level", "debug"])

    assert result.exit_code == 0, result.output
    [call] = uvicorn_calls
    assert call["port"] == 9001
    assert call["host"] == "127.0.0.1"
    assert call["log_level"] == "debug"


def test_port_from_environment(uvicorn_calls: list[dict[str, Any]], monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PORT", "9000")

    result = CliRunner().invoke(cli.main, [])

    assert result.exit_code == 0, result.output
    assert uvicorn_calls[0]["port"] == 9000


def test_missing_assets_prevent_startup(uvicorn_calls: list[dict[str, Any]], monkeypatch: pytest.MonkeyPatch):
    def broken_load_assets() -> Any:
        raise AssetLoadError(Path("public/search-widget.css"), "No such file or directory")

    monkeypatch.setattr(cli, "load_assets", broken_load_assets)

    result = CliRunner().invoke(cli.main, [])

    assert result.exit_code == 1
    assert "search-widget.css" in result.output
    assert uvicorn_calls == []


def test_explicit_port_zero_is_kept(uvicorn_calls: list[dict[str, Any]], monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PORT", "9000")

    result = CliRunner().invoke(cli.main, ["--port", "0"])

    assert result.exit_code == 0, result.output
    assert uvicorn_calls[0]["port"] == 0


def test_uvicorn_drives_the_app_lifespan(uvicorn_calls: list[dict[str, Any]]):
    result = CliRunner().invoke(cli.main, [])

    assert result.exit_code == 0, result.output
    assert uvicorn_calls[0]["lifespan"] == "auto"
