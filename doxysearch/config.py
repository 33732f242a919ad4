"""
Named search sources for the doxysearch CLI.

A source is either a local Doxygen `search/` directory or the URL of a running
doxysearch server. Sources are kept in `config.json` in the user data directory
together with the name of the active source, which `search`, `show` and
`sections` fall back to when no `--path` or `--source` is given.

Server deployments are configured through environment variables instead, see
`doxysearch.settings`.
"""

import json
from pathlib import Path

import doxysearch
from loguru import logger


__all__ = [
    "SourceConfig",
    "LocalSourceConfig",
    "RemoteSourceConfig",
    "Config",
    "ConfigManager",
    "get_config_manager",
]


class SourceConfig:
    """Base class for source configurations."""

    def __init__(self, name, type_):
        # type: (str, str) -> None
        """
        Initialize source configuration.

        :param name: Source name (unique identifier)
        :param type_: Source type ("local" or "remote")
        """
        self.name = name
        self.type = type_

    def to_dict(self):
        # type: () -> dict
        return {"type": self.type}

    @staticmethod
    def from_dict(name, data):
        # type: (str, dict) -> SourceConfig
        """
        Create SourceConfig from dictionary.

        :param name: Source name
        :param data: Dictionary with config data
        :return: LocalSourceConfig or RemoteSourceConfig
        :raises ValueError: If the source type is unknown
        """
        type_ = data.get("type")
        if type_ == "local":
            return LocalSourceConfig(name=name, path=data["path"])
        elif type_ == "remote":
            return RemoteSourceConfig(name=name, url=data["url"], api_key=data.get("api_key"))
        else:
            raise ValueError(f"Unknown source type: {type_}")


class LocalSourceConfig(SourceConfig):
    """Doxygen search directory on disk."""

    def __init__(self, name, path):
        # type: (str, str) -> None
        super().__init__(name, "local")
        self.path = str(Path(path).as_posix())

    def to_dict(self):
        # type: () -> dict
        return {"type": self.type, "path": self.path}


class RemoteSourceConfig(SourceConfig):
    """doxysearch server reachable over HTTP."""

    def __init__(self, name, url, api_key=None):
        # type: (str, str, str|None) -> None
        """
        Initialize remote source configuration.

        :param name: Source name
        :param url: Base URL of remote server (e.g., "https://docs.example.com")
        :param api_key: Optional API key for authentication
        """
        super().__init__(name, "remote")
        self.url = url.rstrip("/")
        self.api_key = api_key

    def to_dict(self):
        # type: () -> dict
        result = {"type": self.type, "url": self.url}
        if self.api_key:
            result["api_key"] = self.api_key
        return result


class Config:
    """Configuration data container."""

    def __init__(self, active_source=None, sources=None):
        # type: (str|None, dict[str, SourceConfig]|None) -> None
        self.active_source = active_source
        self.sources = sources or {}

    def to_dict(self):
        # type: () -> dict
        return {
            "active_source": self.active_source,
            "sources": {name: cfg.to_dict() for name, cfg in self.sources.items()},
        }

    @staticmethod
    def from_dict(data):
        # type: (dict) -> Config
        active_source = data.get("active_source")
        sources_data = data.get("sources", {})
        sources = {name: SourceConfig.from_dict(name, cfg) for name, cfg in sources_data.items()}
        return Config(active_source=active_source, sources=sources)


class ConfigManager:
    """Manager for persistent configuration."""

    def __init__(self, config_path=None):
        # type: (str|Path|None) -> None
        """
        Initialize configuration manager.

        :param config_path: Path to config file (defaults to config.json in the user data dir)
        """
        if config_path is None:
            config_path = Path(doxysearch.dirs.user_data_dir) / "config.json"
        self.config_path = Path(config_path)
        self._config = None  # type: Config|None

    def load(self):
        # type: () -> Config
        """
        Load configuration from file.

        A missing file yields an empty configuration. An unreadable file is logged
        and replaced by an empty configuration.

        :return: Config instance
        """
        if not self.config_path.exists():
            logger.debug(f"No config found at {self.config_path}, starting empty")
            self._config = Config()
            return self._config

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._config = Config.from_dict(data)
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Failed to load config from {self.config_path}: {e}")
            self._config = Config()
        return self._config

    @property
    def config(self):
        # type: () -> Config
        if self._config is None:
            self.load()
        return self._config  # type: ignore

    def save(self):
        # type: () -> None
        """
        Save configuration to file.

        Creates config directory if it doesn't exist.
        """
        if self._config is None:
            raise ValueError("No config loaded")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self._config.to_dict(), f, indent=2)

        logger.debug(f"Saved config to {self.config_path}")

    def get_active(self):
        # type: () -> SourceConfig|None
        """
        Get active source configuration.

        :return: Active SourceConfig or None if no active source
        """
        config = self.config
        if config.active_source is None:
            return None
        return config.sources.get(config.active_source)

    def get_source(self, name):
        # type: (str) -> SourceConfig
        """
        Get a source configuration by name.

        :raises KeyError: If source name not found in configuration
        """
        if name not in self.config.sources:
            raise KeyError(f"Source '{name}' not found in configuration")
        return self.config.sources[name]

    def set_active(self, name):
        # type: (str) -> None
        """
        Set active source by name.

        :param name: Source name to set as active
        :raises KeyError: If source name not found in configuration
        """
        self.get_source(name)
        self.config.active_source = name
        self.save()
        logger.info(f"Set active source to '{name}'")

    def add_source(self, source_config):
        # type: (SourceConfig) -> None
        """
        Add or update source configuration.

        If a source with the same name exists, it is replaced. The first source
        added becomes the active one.

        :param source_config: SourceConfig instance to add
        """
        config = self.config
        config.sources[source_config.name] = source_config

        if config.active_source is None:
            config.active_source = source_config.name

        self.save()
        logger.info(f"Added source '{source_config.name}' ({source_config.type})")

    def remove_source(self, name):
        # type: (str) -> None
        """
        Remove source from configuration.

        If removing the active source, the first remaining source becomes active.

        :param name: Source name to remove
        :raises KeyError: If source name not found
        """
        config = self.config
        self.get_source(name)
        del config.sources[name]

        if config.active_source == name:
            if config.sources:
                config.active_source = next(iter(config.sources))
                logger.info(f"Active source changed to '{config.active_source}'")
            else:
                config.active_source = None
                logger.info("No sources remaining")

        self.save()
        logger.info(f"Removed source '{name}' from configuration")

    def list_sources(self):
        # type: () -> list[tuple[str, SourceConfig, bool]]
        """
        List all configured sources.

        :return: List of tuples (name, SourceConfig, is_active)
        """
        config = self.config
        return [(name, cfg, name == config.active_source) for name, cfg in config.sources.items()]


# Singleton instance
_config_manager = None  # type: ConfigManager|None


def get_config_manager():
    # type: () -> ConfigManager
    """
    Get singleton ConfigManager instance.

    :return: ConfigManager instance
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
