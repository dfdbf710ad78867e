"""Tests for run-parameter configs on disk."""

import json

import config


class TestConfig:
    def test_defaults_without_files(self, config_dir):
        cfg = config.load_config()
        assert cfg["world"] == {"nx": 30, "nz": 30}
        assert cfg["seed"] == -1
        assert cfg["normalize_normals"] is False

    def test_merge_keeps_defaults(self, config_dir):
        path = config_dir / "small.json"
        path.write_text(json.dumps({"world": {"nx": 8}, "max_radius": 2, "unknown": 1}))
        cfg = config.load_config(path)
        assert cfg["world"] == {"nx": 8, "nz": 30}
        assert cfg["max_radius"] == 2
        assert "unknown" not in cfg

    def test_save_then_load_last(self, config_dir):
        params = {"world": {"nx": 12, "nz": 9}, "tick_rate": 20, "amount_min": 0.05}
        path = config.save_config(params, "My run!")
        assert path.name == "My_run.json"
        assert config.get_last_config() == "My_run"
        assert config.config_exists("My run")
        cfg = config.load_config()
        assert cfg["world"] == {"nx": 12, "nz": 9}
        assert cfg["tick_rate"] == 20
        assert cfg["amount_min"] == 0.05

    def test_index_refresh(self, config_dir):
        (config_dir / "a.json").write_text("{}")
        (config_dir / "B.json").write_text("{}")
        config.refresh_index()
        assert config.list_configs() == ["a", "B"]

    def test_malformed_file_falls_back(self, config_dir, caplog):
        path = config_dir / "broken.json"
        path.write_text("{not json")
        with caplog.at_level("WARNING", logger="config"):
            cfg = config.load_config(path)
        assert cfg == config._default_config()
        assert "unreadable" in caplog.text

    def test_non_object_falls_back(self, config_dir):
        path = config_dir / "list.json"
        path.write_text("[1, 2]")
        assert config.load_config(path) == config._default_config()

    def test_delete_clears_last(self, config_dir):
        config.save_config({}, "gone")
        config.delete_config("gone")
        assert not config.config_exists("gone")
        assert config.get_last_config() is None
        assert not (config_dir / "gone.json").exists()
