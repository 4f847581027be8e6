from __future__ import annotations

import json
import logging
import runpy
import time
from pathlib import Path

import pytest

from fx_glance import cli
from fx_glance.config import DEFAULT_CACHE_PATH, GlanceConfig
from fx_glance.utils.logger import get_logger, set_verbosity


def _args(tmp_path: Path, *extra: str) -> list[str]:
    return [
        "--cache-file",
        str(tmp_path / "currentRates.json"),
        "--api-key-file",
        str(tmp_path / "api_key.txt"),
        "--no-color",
        *extra,
    ]


def test_parse_args_defaults() -> None:
    args = cli.parse_args([])
    config = cli.build_config(args)

    assert args.color is True
    assert args.refresh is False
    assert config == GlanceConfig()
    assert config.cache_path == DEFAULT_CACHE_PATH


def test_build_config_applies_overrides(tmp_path: Path) -> None:
    args = cli.parse_args(_args(tmp_path, "--timeout", "5", "--max-age", "60", "--refresh"))

    config = cli.build_config(args)

    assert config.cache_path == tmp_path / "currentRates.json"
    assert config.timeout == 5.0
    assert config.max_age_seconds == 60
    assert config.color is False
    assert config.refresh is True


def test_main_prints_cached_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    payload = {"timestamp": int(time.time()), "rates": {"AUD": 1.6, "EUR": 1.0}}
    (tmp_path / "currentRates.json").write_text(json.dumps(payload), encoding="utf-8")

    exit_code = cli.main(_args(tmp_path))

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Exchange rates from" in out
    assert "1 EUR buys AUD $ 1.6000" in out
    assert "1 AUD buys EUR € 0.6250" in out


def test_main_reports_missing_key(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(_args(tmp_path))

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "api_key.txt" in captured.err
    assert captured.out == ""


def test_main_reports_invalid_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(_args(tmp_path, "--timeout", "0"))

    assert exit_code == 1
    assert "timeout" in capsys.readouterr().err


def test_main_reports_remote_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    from fx_glance.errors import RemoteError

    def _raise(config, **_kwargs):
        raise RemoteError("Rates provider returned an error: 401 - invalid_app_id")

    monkeypatch.setattr(cli, "run_pipeline", _raise)

    assert cli.main(_args(tmp_path)) == 1
    assert "invalid_app_id" in capsys.readouterr().err


def test_set_verbosity_toggles_debug() -> None:
    set_verbosity(True)
    assert get_logger().level == logging.DEBUG
    set_verbosity(False)
    assert get_logger().level == logging.INFO


def test_show_rates_script_invokes_main(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {"value": False}

    def _fake_main() -> int:
        called["value"] = True
        return 0

    monkeypatch.setattr(cli, "main", _fake_main)

    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("fx_glance.scripts.show_rates", run_name="__main__")

    assert excinfo.value.code == 0
    assert called["value"] is True


def test_main_treats_bad_cached_timestamp_as_miss(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "currentRates.json").write_text(
        '{"timestamp": Infinity, "rates": {"AUD": 1.6, "EUR": 1.0}}', encoding="utf-8"
    )

    exit_code = cli.main(_args(tmp_path))

    assert exit_code == 1
    assert "api_key.txt" in capsys.readouterr().err


def test_main_maps_pipeline_error_to_exit_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    from fx_glance.errors import PipelineError

    def _raise(config, **_kwargs):
        raise PipelineError("present_stage called before a snapshot was loaded")

    monkeypatch.setattr(cli, "run_pipeline", _raise)

    assert cli.main(_args(tmp_path)) == 1
    assert "present_stage" in capsys.readouterr().err
