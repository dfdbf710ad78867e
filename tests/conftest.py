"""Shared fixtures."""

import pytest

import config


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point configs/ and last.txt at a temp dir with an empty index."""
    monkeypatch.setattr(config, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(config, "LAST_FILE", tmp_path / "last.txt")
    config.refresh_index()
    yield tmp_path
    config.refresh_index()
