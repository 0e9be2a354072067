"""
Tests for ConfigManager defaults, loading and persistence.
"""
import json
from unittest.mock import patch
from agatokens.utils.config import ConfigManager, DEFAULT_CONFIG


def make_manager(config_dir):
    with patch.object(ConfigManager, "__init__", lambda self: None):
        mgr = ConfigManager()
    mgr.config_dir = config_dir
    mgr.config_file = config_dir / "config.json"
    return mgr


class TestConfigDefaults:
    def test_default_tool(self):
        assert DEFAULT_CONFIG["tool"] == "agalang-core"

    def test_default_timeout_is_none(self):
        assert DEFAULT_CONFIG["timeout"] is None

    def test_default_log_file(self):
        assert DEFAULT_CONFIG["log_file"].endswith("agatokens_engine.log")


class TestConfigManagerLoadSave:
    def test_creates_config_dir(self, tmp_path):
        config_dir = tmp_path / ".agatokens"
        mgr = make_manager(config_dir)
        mgr.config = mgr.load_config()
        assert config_dir.exists()

    def test_load_returns_defaults_when_no_file(self, tmp_path):
        mgr = make_manager(tmp_path / ".agatokens")
        assert mgr.load_config() == DEFAULT_CONFIG

    def test_load_merges_user_config(self, tmp_path):
        config_dir = tmp_path / ".agatokens"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"tool": "/opt/agal/agalang-core"}))

        config = make_manager(config_dir).load_config()
        assert config["tool"] == "/opt/agal/agalang-core"
        assert config["timeout"] is None

    def test_load_handles_corrupt_config(self, tmp_path):
        config_dir = tmp_path / ".agatokens"
        config_dir.mkdir()
        (config_dir / "config.json").write_text("NOT VALID JSON {{{")

        config = make_manager(config_dir).load_config()
        assert config["tool"] == "agalang-core"

    def test_load_ignores_non_object(self, tmp_path):
        config_dir = tmp_path / ".agatokens"
        config_dir.mkdir()
        (config_dir / "config.json").write_text("[1, 2]")

        assert make_manager(config_dir).load_config() == DEFAULT_CONFIG

    def test_save_and_reload(self, tmp_path):
        config_dir = tmp_path / ".agatokens"
        mgr = make_manager(config_dir)
        mgr.config = DEFAULT_CONFIG.copy()
        mgr.set("timeout", 30)

        mgr2 = make_manager(config_dir)
        mgr2.config = mgr2.load_config()
        assert mgr2.get("timeout") == 30


class TestConfigManagerGet:
    def test_get_missing_key_returns_default(self, tmp_path):
        mgr = make_manager(tmp_path)
        mgr.config = DEFAULT_CONFIG.copy()
        assert mgr.get("nonexistent", "fallback") == "fallback"
        assert mgr.get("nonexistent") is None

    def test_init_uses_home(self, tmp_path):
        with patch("pathlib.Path.home", return_value=tmp_path):
            mgr = ConfigManager()
        assert mgr.config_file == tmp_path / ".agatokens" / "config.json"
        assert mgr.get("tool") == "agalang-core"
