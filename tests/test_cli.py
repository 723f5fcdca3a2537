import logging
import shutil

import pytest

from flight_training.jobs import cli


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for key in ["FLIGHTS_INPUT", "OUTPUT_PREFIX", "TRAINDAY_CSV", "LOG_LEVEL", "APP_NAME", "WORKERS"]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr("flight_training.config.DEFAULT_ENV_FILE", tmp_path / "missing.env")
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()


def test_main_runs_pipeline(tmp_path, fixtures_dir):
    source = tmp_path / "flights.csv"
    shutil.copy(fixtures_dir / "flights_sample.csv", source)

    code = cli.main(
        [
            "--input", str(source),
            "--output", f"{tmp_path / 'out'}/",
            "--trainday-csv", str(fixtures_dir / "trainday_sample.csv"),
            "--workers", "2",
            "--chunk-size", "2",
            "--run-id", "cli-test",
        ]
    )

    assert code == 0
    assert (tmp_path / "out" / "flights.csv").read_text(encoding="utf-8").count("\n") == 3
    assert (tmp_path / "out" / "delays.csv").exists()
    assert (tmp_path / "logs" / "flight-training-cli-test.log").exists()


def test_main_without_trainday_filter(tmp_path, fixtures_dir):
    source = tmp_path / "flights.csv"
    shutil.copy(fixtures_dir / "flights_sample.csv", source)

    code = cli.main(
        ["--input", str(source), "--output", f"{tmp_path}/run-", "--no-trainday-filter"]
    )

    assert code == 0
    assert (tmp_path / "run-flights.csv").read_text(encoding="utf-8").count("\n") == 4


def test_main_returns_error_for_missing_input(tmp_path):
    code = cli.main(
        ["--input", str(tmp_path / "absent.csv"), "--output", f"{tmp_path}/x-", "--no-trainday-filter"]
    )

    assert code == 1
    assert not (tmp_path / "x-flights.csv").exists()


def test_main_returns_error_for_bad_configuration(monkeypatch, tmp_path):
    monkeypatch.setenv("WORKERS", "many")
    fallback_logs = tmp_path / "fallback"
    monkeypatch.setattr(cli, "REPO_ROOT", fallback_logs)

    code = cli.main(["--no-trainday-filter", "--run-id", "bad-config"])

    assert code == 1
    log_file = fallback_logs / "logs" / "flight-training-bad-config.log"
    assert "Failed to load configuration" in log_file.read_text(encoding="utf-8")


def test_apply_overrides_rejects_non_positive_workers(app_config):
    args = cli.parse_args(["--workers", "0"])

    with pytest.raises(ValueError):
        cli._apply_overrides(app_config, args)
