"""Config loading precedence."""

import json
from pathlib import Path

from opencode_relay import load_config
from opencode_relay.config import DEFAULT_SESSIONS_DIR


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / "missing.json")
    assert cfg.port == 4096
    assert cfg.sessions_dir == DEFAULT_SESSIONS_DIR


def test_file_values_apply(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"port": 5000, "model": "gpt-x", "sessions_dir": str(tmp_path / "s")}))
    cfg = load_config(path)
    assert cfg.port == 5000
    assert cfg.model == "gpt-x"
    assert cfg.host == "127.0.0.1"
    assert cfg.sessions_dir == tmp_path / "s"


def test_overrides_beat_file_and_none_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"port": 5000, "host": "10.0.0.2"}))
    cfg = load_config(path, port=6000, host=None)
    assert cfg.port == 6000
    assert cfg.host == "10.0.0.2"


def test_malformed_file_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert load_config(path).port == 4096
    path.write_text(json.dumps({"port": "not-a-port"}))
    assert load_config(path).port == 4096


def test_with_overrides_returns_copy(tmp_path):
    base = load_config(tmp_path / "missing.json")
    other = base.with_overrides(provider="p2", sessions_dir=Path("/tmp/x"))
    assert other.provider == "p2"
    assert base.provider == "myprovider"
    assert other.sessions_dir == Path("/tmp/x")
