import pytest

from flight_training.config import (
    DEFAULT_OUTPUT_PREFIX,
    DEFAULT_TRAINDAY_CSV,
    REPO_ROOT,
    load_config,
    load_environment,
)

CONFIG_KEYS = [
    "FLIGHTS_INPUT",
    "OUTPUT_PREFIX",
    "TRAINDAY_CSV",
    "LOG_DIR",
    "LOG_LEVEL",
    "APP_NAME",
    "WORKERS",
]


@pytest.fixture(autouse=True)
def _clear_config_env(monkeypatch):
    for key in CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_load_config_reads_env_file(tmp_path):
    env_file = tmp_path / "test.env"
    env_file.write_text(
        "\n".join(
            [
                "# comment lines are ignored",
                "FLIGHTS_INPUT=/data/flights/2015.csv",
                "OUTPUT_PREFIX='/tmp/training/'",
                "TRAINDAY_CSV=/data/trainday.csv",
                "LOG_DIR=logs/testing",
                "LOG_LEVEL=debug",
                "APP_NAME=training-runner",
                "WORKERS=4",
            ]
        ),
        encoding="utf-8",
    )

    config = load_config(env_file)

    assert config.input_path == "/data/flights/2015.csv"
    assert config.output_prefix == "/tmp/training/"
    assert config.trainday_csv_path == "/data/trainday.csv"
    assert config.log_directory == REPO_ROOT / "logs/testing"
    assert config.log_level == "DEBUG"
    assert config.app_name == "training-runner"
    assert config.workers == 4


def test_load_config_prefers_environment_variables(tmp_path, monkeypatch):
    env_file = tmp_path / "test.env"
    env_file.write_text(
        "\n".join(
            [
                "FLIGHTS_INPUT=/from/env/file.csv",
                f"LOG_DIR={tmp_path/'from_env_file'}",
            ]
        ),
        encoding="utf-8",
    )

    env_log_dir = tmp_path / "from_env"
    monkeypatch.setenv("FLIGHTS_INPUT", "/from/environment.csv")
    monkeypatch.setenv("LOG_DIR", str(env_log_dir))
    monkeypatch.setenv("LOG_LEVEL", "warning")

    config = load_config(env_file)

    assert config.input_path == "/from/environment.csv"
    assert config.log_directory == env_log_dir
    assert config.log_level == "WARNING"


def test_load_config_defaults(tmp_path):
    config = load_config(tmp_path / "missing.env")

    assert config.output_prefix == DEFAULT_OUTPUT_PREFIX
    assert config.trainday_csv_path == DEFAULT_TRAINDAY_CSV
    assert config.input_path.endswith("small.csv")
    assert config.log_directory == REPO_ROOT / "logs"
    assert config.app_name == "flight-training"
    assert config.workers == 1


def test_empty_trainday_disables_filter(tmp_path):
    env_file = tmp_path / "test.env"
    env_file.write_text("TRAINDAY_CSV=\n", encoding="utf-8")

    assert load_config(env_file).trainday_csv_path is None


@pytest.mark.parametrize("workers", ["zero", "0", "-2"])
def test_invalid_workers_is_a_configuration_error(tmp_path, monkeypatch, workers):
    monkeypatch.setenv("WORKERS", workers)

    with pytest.raises(ValueError):
        load_config(tmp_path / "missing.env")


def test_load_environment_merges_dotenv_and_environment(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text('APP_NAME="dotenv-app"\nLOG_LEVEL=debug\n', encoding="utf-8")
    monkeypatch.setenv("LOG_LEVEL", "error")

    values = load_environment(env_file)

    assert values["APP_NAME"] == "dotenv-app"
    assert values["LOG_LEVEL"] == "error"
