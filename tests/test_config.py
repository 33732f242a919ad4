"""Tests for CLI source configuration management."""

import json
from pathlib import Path

import pytest

import doxysearch
from doxysearch.config import (
    Config,
    ConfigManager,
    LocalSourceConfig,
    RemoteSourceConfig,
    SourceConfig,
)


@pytest.fixture
def temp_config_path(tmp_path):
    # type: (Path) -> Path
    """Create temporary config path for testing."""
    return tmp_path / "config.json"


@pytest.fixture
def config_manager(temp_config_path):
    # type: (Path) -> ConfigManager
    """Create ConfigManager with temporary config path."""
    return ConfigManager(config_path=temp_config_path)


def test_local_source_config():
    # type: () -> None
    """Test LocalSourceConfig creation and serialization."""
    config = LocalSourceConfig(name="geometry", path="/docs/html/search")
    assert config.type == "local"
    assert config.to_dict() == {"type": "local", "path": "/docs/html/search"}


def test_remote_source_config():
    # type: () -> None
    """Test RemoteSourceConfig strips trailing slashes and hides empty keys."""
    config = RemoteSourceConfig(name="prod", url="https://docs.example.com/", api_key="secret")
    assert config.url == "https://docs.example.com"
    assert config.to_dict() == {"type": "remote", "url": "https://docs.example.com", "api_key": "secret"}
    assert "api_key" not in RemoteSourceConfig(name="prod", url="https://docs.example.com").to_dict()


def test_source_config_from_dict():
    # type: () -> None
    """Test source configs are rebuilt from their dict form."""
    local = SourceConfig.from_dict("geometry", {"type": "local", "path": "/docs"})
    assert isinstance(local, LocalSourceConfig)
    remote = SourceConfig.from_dict("prod", {"type": "remote", "url": "https://docs.example.com"})
    assert isinstance(remote, RemoteSourceConfig)
    assert remote.api_key is None
    with pytest.raises(ValueError, match="Unknown source type"):
        SourceConfig.from_dict("x", {"type": "ftp"})


def test_config_round_trip():
    # type: () -> None
    """Test Config serialization."""
    config = Config(active_source="a", sources={"a": LocalSourceConfig("a", "/docs")})
    restored = Config.from_dict(config.to_dict())
    assert restored.active_source == "a"
    assert restored.sources["a"].path == "/docs"  # type: ignore


def test_load_missing_file(config_manager):
    # type: (ConfigManager) -> None
    """Test a missing config file yields an empty configuration."""
    config = config_manager.load()
    assert config.active_source is None
    assert config.sources == {}
    assert config_manager.get_active() is None


def test_load_corrupt_file(config_manager, temp_config_path):
    # type: (ConfigManager, Path) -> None
    """Test an unreadable config file yields an empty configuration."""
    temp_config_path.write_text("{not json", encoding="utf-8")
    assert config_manager.load().sources == {}


def test_save_requires_loaded_config(config_manager):
    # type: (ConfigManager) -> None
    """Test saving before loading is rejected."""
    with pytest.raises(ValueError, match="No config loaded"):
        config_manager.save()


def test_add_source_persists(config_manager, temp_config_path):
    # type: (ConfigManager, Path) -> None
    """Test adding sources writes the config file and activates the first one."""
    config_manager.add_source(LocalSourceConfig("geometry", "/docs/geometry"))
    config_manager.add_source(RemoteSourceConfig("prod", "https://docs.example.com"))

    data = json.loads(temp_config_path.read_text(encoding="utf-8"))
    assert data["active_source"] == "geometry"
    assert set(data["sources"]) == {"geometry", "prod"}

    reloaded = ConfigManager(config_path=temp_config_path)
    assert reloaded.get_active().name == "geometry"  # type: ignore
    assert [(name, active) for name, _, active in reloaded.list_sources()] == [("geometry", True), ("prod", False)]


def test_set_active(config_manager):
    # type: (ConfigManager) -> None
    """Test switching the active source."""
    config_manager.add_source(LocalSourceConfig("a", "/a"))
    config_manager.add_source(LocalSourceConfig("b", "/b"))
    config_manager.set_active("b")
    assert config_manager.get_active().name == "b"  # type: ignore
    with pytest.raises(KeyError):
        config_manager.set_active("missing")


def test_get_source(config_manager):
    # type: (ConfigManager) -> None
    """Test source lookup by name."""
    config_manager.add_source(LocalSourceConfig("a", "/a"))
    assert config_manager.get_source("a").type == "local"
    with pytest.raises(KeyError, match="Source 'missing' not found"):
        config_manager.get_source("missing")


def test_remove_active_source(config_manager):
    # type: (ConfigManager) -> None
    """Test removing the active source activates the next one."""
    config_manager.add_source(LocalSourceConfig("a", "/a"))
    config_manager.add_source(LocalSourceConfig("b", "/b"))
    config_manager.remove_source("a")
    assert config_manager.get_active().name == "b"  # type: ignore
    config_manager.remove_source("b")
    assert config_manager.get_active() is None
    with pytest.raises(KeyError):
        config_manager.remove_source("b")


def test_default_config_path(tmp_path, monkeypatch):
    # type: (Path, pytest.MonkeyPatch) -> None
    """Test the config file lives in the user data directory."""

    class MockDirs:
        user_data_dir = str(tmp_path)

    monkeypatch.setattr(doxysearch, "dirs", MockDirs())
    assert ConfigManager().config_path == tmp_path / "config.json"
