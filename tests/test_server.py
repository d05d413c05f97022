"""Tests for application wiring and the CLI helpers."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from tram_skill import __version__
from tram_skill.app import build_runtime, health_response
from tram_skill.data.catalog import StopCatalog
from tram_skill.data.config import SkillConfig
from tram_skill.server import check_network, serve


def test_health_returns_ok_status():
    """Health check should return status ok."""
    response = health_response(19)
    assert response.status == "ok"
    assert response.stops == 19


def test_health_returns_version():
    """Health check should return the current version."""
    response = health_response(0)
    assert response.version == __version__


def test_health_returns_timestamp():
    """Health check should return a valid ISO timestamp."""
    response = health_response(0)
    assert "T" in response.timestamp


def test_build_runtime_wires_config(catalog: StopCatalog, gateway, tmp_path: Path):
    config = SkillConfig(
        TRAM_LINE_ID=42,
        TRAM_DB_PATH=tmp_path / "prefs.db",
        TRAM_SYNC_INTERVAL=60,
    )

    runtime = build_runtime(config, catalog=catalog, gateway=gateway)

    assert runtime.engine.line_id == 42
    assert runtime.engine.store is runtime.store
    assert runtime.sync.store is runtime.store
    assert runtime.sync.interval == 60
    assert runtime.sync.max_bytes == 50_000_000
    assert runtime.dispatcher.engine is runtime.engine


def test_check_network_valid(network_csv: Path, capsys):
    assert check_network(network_csv) == 0
    assert "5 stops" in capsys.readouterr().out


def test_check_network_invalid(tmp_path: Path, capsys):
    path = tmp_path / "bad.csv"
    path.write_text("Museum,x,1\n", encoding="utf-8")

    assert check_network(path) == 1
    assert "Invalid network data" in capsys.readouterr().out


def test_check_network_missing_file(tmp_path: Path):
    assert check_network(tmp_path / "missing.csv") == 1


async def test_serve_warns_about_sample_network(monkeypatch, caplog):
    monkeypatch.delenv("TRAM_NETWORK_PATH", raising=False)
    caplog.set_level(logging.WARNING)

    with (
        patch("tram_skill.server.get_skill_config", return_value=SkillConfig()),
        patch("tram_skill.server.build_runtime", side_effect=RuntimeError("stop")),
        pytest.raises(RuntimeError),
    ):
        await serve()

    assert "sample network" in caplog.text


async def test_serve_no_warning_with_network_path(network_csv: Path, caplog):
    caplog.set_level(logging.WARNING)
    config = SkillConfig(TRAM_NETWORK_PATH=network_csv)

    with (
        patch("tram_skill.server.get_skill_config", return_value=config),
        patch("tram_skill.server.build_runtime", side_effect=RuntimeError("stop")),
        pytest.raises(RuntimeError),
    ):
        await serve()

    assert "sample network" not in caplog.text
