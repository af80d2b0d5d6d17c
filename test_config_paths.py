import json
import logging
import tempfile
from pathlib import Path

import config_paths
from completion_popup import RESERVED_WORDS


def _point_at(monkeypatch, cfg_dir):
    monkeypatch.setattr(config_paths, "CONFIG_DIR", str(cfg_dir))
    monkeypatch.setattr(config_paths, "CONFIG_JSON", str(cfg_dir / "config.json"))
    monkeypatch.setattr(config_paths, "LOG_PATH", str(cfg_dir / "gridpeek.log"))


def test_load_config_defaults_without_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "gridpeek"
        cfg_dir.mkdir(parents=True, exist_ok=True)
        # point module paths to temp
        orig_dir = config_paths.CONFIG_DIR
        orig_json = config_paths.CONFIG_JSON
        try:
            config_paths.CONFIG_DIR = str(cfg_dir)
            config_paths.CONFIG_JSON = str(cfg_dir / "config.json")
            cfg = config_paths.load_config()
            assert cfg["KEY_CONFIG"] == {}
            assert cfg["PAGE_SIZE"] == config_paths.PAGE_SIZE_DEFAULT
            assert cfg["RESERVED_WORDS"] == list(RESERVED_WORDS)
            assert cfg["LOG_LEVEL"] == "WARNING"
        finally:
            config_paths.CONFIG_DIR = orig_dir
            config_paths.CONFIG_JSON = orig_json


def test_load_config_reads_json_overrides(tmp_path, monkeypatch):
    _point_at(monkeypatch, tmp_path)
    (tmp_path / "config.json").write_text(
        json.dumps(
            {
                "key_config": {"scroll_down": "n", "quit": 5},
                "page_size": 50,
                "reserved_words": ["LIKE", "BETWEEN"],
                "log_level": "debug",
            }
        )
    )
    cfg = config_paths.load_config()
    assert cfg["KEY_CONFIG"] == {"scroll_down": "n"}
    assert cfg["PAGE_SIZE"] == 50
    assert cfg["RESERVED_WORDS"] == ["LIKE", "BETWEEN"]
    assert cfg["LOG_LEVEL"] == "DEBUG"


def test_load_config_ignores_bad_values(tmp_path, monkeypatch):
    _point_at(monkeypatch, tmp_path)
    (tmp_path / "config.json").write_text(
        json.dumps({"page_size": 0, "reserved_words": "AND", "key_config": []})
    )
    cfg = config_paths.load_config()
    assert cfg["PAGE_SIZE"] == config_paths.PAGE_SIZE_DEFAULT
    assert cfg["RESERVED_WORDS"] == list(RESERVED_WORDS)
    assert cfg["KEY_CONFIG"] == {}


def test_load_config_survives_broken_json(tmp_path, monkeypatch, caplog):
    _point_at(monkeypatch, tmp_path)
    (tmp_path / "config.json").write_text("{not json")
    cfg = config_paths.load_config()
    assert cfg["PAGE_SIZE"] == config_paths.PAGE_SIZE_DEFAULT
    assert "unreadable config" in caplog.text


def test_configure_logging_prefers_environment(tmp_path, monkeypatch):
    _point_at(monkeypatch, tmp_path / "nested")
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    monkeypatch.setenv(config_paths.LOG_LEVEL_ENV, "debug")

    assert config_paths.configure_logging("ERROR") == logging.DEBUG
    assert (tmp_path / "nested").is_dir()
    assert calls[0]["filename"] == str(tmp_path / "nested" / "gridpeek.log")


def test_configure_logging_falls_back_on_unknown_level(tmp_path, monkeypatch):
    _point_at(monkeypatch, tmp_path)
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: None)
    monkeypatch.delenv(config_paths.LOG_LEVEL_ENV, raising=False)
    assert config_paths.configure_logging("chatty") == logging.WARNING
    assert config_paths.configure_logging("error") == logging.ERROR
