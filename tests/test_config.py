"""Tests for clipdeck.utils.config_manager module."""

from pathlib import Path

import yaml

from clipdeck.utils.config_manager import ConfigManager, get_data_dir


class TestDataDir:
    def test_clipdeck_home_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CLIPDECK_HOME", str(tmp_path))
        assert get_data_dir() == tmp_path

    def test_appdata(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CLIPDECK_HOME", raising=False)
        monkeypatch.setenv("APPDATA", str(tmp_path))
        assert get_data_dir() == tmp_path / "ClipDeck"

    def test_home_fallback(self, monkeypatch):
        monkeypatch.delenv("CLIPDECK_HOME", raising=False)
        monkeypatch.delenv("APPDATA", raising=False)
        assert get_data_dir() == Path.home() / ".clipdeck"


class TestConfigDefaults:
    def test_defaults(self, tmp_path):
        config = ConfigManager(str(tmp_path / "settings.yaml"))
        assert config.get("history.max_size") == 200
        assert config.get("clipboard.check_interval") == 500
        assert config.get("ui.window_width") == 600
        assert config.get("ui.min_height") == 300
        assert config.get("ui.theme") == "auto"
        assert config.get("logging.level") == "INFO"

    def test_missing_key_returns_default(self, tmp_path):
        config = ConfigManager(str(tmp_path / "settings.yaml"))
        assert config.get("nope.nothing", 42) == 42
        assert config.get("history.max_size.deeper") is None

    def test_defaults_are_valid(self, tmp_path):
        assert ConfigManager(str(tmp_path / "settings.yaml")).validate()


class TestConfigSaveLoad:
    def test_user_file_is_merged(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.dump({"history": {"max_size": 75}, "ui": {"theme": "dark"}}))
        config = ConfigManager(str(path))
        assert config.get("history.max_size") == 75
        assert config.get("ui.theme") == "dark"
        assert config.get("ui.window_width") == 600

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "settings.yaml"
        config = ConfigManager(str(path))
        config.set("ui.show_notifications", False)
        config.set("extra.value", "x")
        assert config.save()
        assert path.exists()

        loaded = ConfigManager(str(path))
        assert loaded.get("ui.show_notifications") is False
        assert loaded.get("extra.value") == "x"

    def test_malformed_yaml_keeps_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("history: [unclosed\n")
        config = ConfigManager(str(path))
        assert config.get("history.max_size") == 200

    def test_non_mapping_file_ignored(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- just\n- a list\n")
        assert ConfigManager(str(path)).get("history.max_size") == 200

    def test_reset(self, tmp_path):
        config = ConfigManager(str(tmp_path / "settings.yaml"))
        config.set("history.max_size", 999)
        config.reset()
        assert config.get("history.max_size") == 200

    def test_get_all_is_a_copy(self, tmp_path):
        config = ConfigManager(str(tmp_path / "settings.yaml"))
        snapshot = config.get_all()
        snapshot["history"]["max_size"] = 1
        assert config.get("history.max_size") == 200


class TestValidate:
    def test_small_interval_rejected(self, tmp_path):
        config = ConfigManager(str(tmp_path / "settings.yaml"))
        config.set("clipboard.check_interval", 50)
        assert not config.validate()

    def test_small_history_rejected(self, tmp_path):
        config = ConfigManager(str(tmp_path / "settings.yaml"))
        config.set("history.max_size", 5)
        assert not config.validate()

    def test_unknown_theme_rejected(self, tmp_path):
        config = ConfigManager(str(tmp_path / "settings.yaml"))
        config.set("ui.theme", "neon")
        assert not config.validate()

    def test_missing_key_rejected(self, tmp_path):
        config = ConfigManager(str(tmp_path / "settings.yaml"))
        del config.config["logging"]
        assert not config.validate()
