# tests/test_main.py

import logging

import pytest

from config import DEFAULT_MAP_SIZE, DEFAULT_SAVE_PATH, LOG_LEVEL_ENV
from logging_config import configure_logging
from main import build_parser


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert (args.width, args.height) == DEFAULT_MAP_SIZE
    assert args.edit_map is False
    assert args.save_path == DEFAULT_SAVE_PATH
    assert args.load is False
    assert args.assets is None


def test_parser_options() -> None:
    args = build_parser().parse_args(["--edit-map", "--width", "40", "--height", "12", "--load"])
    assert args.edit_map is True
    assert (args.width, args.height) == (40, 12)
    assert args.load is True


@pytest.mark.parametrize("value", ["1", "101", "abc"])
def test_parser_rejects_bad_map_size(value: str) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--width", value])


@pytest.fixture
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_configure_logging_explicit_level(restore_root_level, monkeypatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")
    assert configure_logging("debug") == "DEBUG"
    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_env_fallback(restore_root_level, monkeypatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
    assert configure_logging() == "WARNING"

    monkeypatch.delenv(LOG_LEVEL_ENV)
    assert configure_logging() == "INFO"


def test_parser_log_level() -> None:
    assert build_parser().parse_args(["--log-level", "warning"]).log_level == "WARNING"
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--log-level", "bogus"])


def test_configure_logging_bad_env_level(restore_root_level, monkeypatch, caplog) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV, "bogus")
    caplog.set_level(logging.WARNING)
    assert configure_logging() == "INFO"
    assert logging.getLogger().level == logging.INFO
    assert "unknown log level 'bogus'" in caplog.text
