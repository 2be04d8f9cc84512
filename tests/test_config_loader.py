from __future__ import annotations

import io
import logging
import os
from pathlib import Path

import yaml

from config import Config, parse_bool_env, parse_int_env
from utils.config_loader import (
    apply_config_to_env,
    create_example_config,
    flatten_dict,
    load_config,
)


def test_flatten_dict():
    assert flatten_dict({"server": {"port": 4040}, "a": 1}) == {"server.port": 4040, "a": 1}


def test_load_config(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("hooks:\n  silent: true\n  dedup_window_ms: 500\n")
    assert load_config(path) == {"hooks.silent": True, "hooks.dedup_window_ms": 500}

    assert load_config(tmp_path / "missing.yaml") == {}
    path.write_text("hooks: [unclosed")
    assert load_config(path) == {}
    path.write_text("- just\n- a list\n")
    assert load_config(path) == {}


def test_apply_config_does_not_override_env(monkeypatch):
    monkeypatch.setenv("AGENTCRAFT_PORT", "9999")
    monkeypatch.delenv("AGENTCRAFT_SILENT", raising=False)
    apply_config_to_env({"server.port": 1234, "hooks.silent": True, "other": "x"})

    assert os.environ["AGENTCRAFT_PORT"] == "9999"
    assert os.environ["AGENTCRAFT_SILENT"] == "true"


def test_example_config_is_valid_yaml(tmp_path: Path):
    path = create_example_config(tmp_path / "nested" / "config.yaml")
    assert isinstance(yaml.safe_load(path.read_text()), dict)


def test_env_parsing_helpers():
    assert parse_bool_env("YES") is True
    assert parse_bool_env("0") is False
    assert parse_bool_env("", default=True) is True
    assert parse_int_env("42", 1) == 42
    assert parse_int_env("soon", 1) == 1


def test_config_from_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("AGENTCRAFT_ASSIGNMENTS", str(tmp_path / "a.json"))
    monkeypatch.setenv("AGENTCRAFT_DEDUP_WINDOW_MS", "250")
    monkeypatch.setenv("AGENTCRAFT_SILENT", "on")
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "hooks.log"))
    cfg = Config.from_env()
    assert cfg.assignments_path == tmp_path / "a.json"
    assert cfg.dedup_window_ms == 250
    assert cfg.silent is True
    assert cfg.log_file == str(tmp_path / "hooks.log")


def test_home_is_read_when_config_is_built(monkeypatch, tmp_path: Path):
    from utils.constants import get_config_path

    monkeypatch.delenv("AGENTCRAFT_ASSIGNMENTS", raising=False)
    monkeypatch.delenv("AGENTCRAFT_PACKS_DIR", raising=False)
    monkeypatch.setenv("AGENTCRAFT_HOME", str(tmp_path / "home"))

    cfg = Config.from_env()
    assert cfg.assignments_path == tmp_path / "home" / "assignments.json"
    assert cfg.packs_dir == tmp_path / "home" / "packs"
    assert get_config_path() == tmp_path / "home" / "config.yaml"


def test_dotenv_home_applies_after_import(monkeypatch, tmp_path: Path):
    from dotenv import load_dotenv

    # Registered first so teardown removes what load_dotenv sets
    monkeypatch.setenv("AGENTCRAFT_HOME", "")
    monkeypatch.delenv("AGENTCRAFT_HOME")
    monkeypatch.delenv("AGENTCRAFT_ASSIGNMENTS", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(f"AGENTCRAFT_HOME={tmp_path / 'from-dotenv'}\n")
    load_dotenv(env_file)

    assert Config.from_env().assignments_path == tmp_path / "from-dotenv" / "assignments.json"


def test_log_level_is_read_at_configuration(monkeypatch):
    from utils.colored_logger import configure_root_logging, setup_logger

    root = logging.getLogger()
    previous = root.level
    logger = setup_logger("agentcraft.test_levels")
    assert logger.level == logging.NOTSET
    try:
        monkeypatch.setenv("AGENTCRAFT_LOG_LEVEL", "DEBUG")
        configure_root_logging(stream=io.StringIO())
        assert logger.getEffectiveLevel() == logging.DEBUG

        monkeypatch.setenv("AGENTCRAFT_LOG_LEVEL", "WARNING")
        configure_root_logging(stream=io.StringIO())
        assert logger.getEffectiveLevel() == logging.WARNING
    finally:
        root.setLevel(previous)
