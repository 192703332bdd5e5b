"""Configuration directory loading."""

import logging
from pathlib import Path
from typing import Dict, Any, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from pydantic import ValidationError

from pmavhost.errors import ConfigError
from pmavhost.models.config import PhpMyAdminConfig
from pmavhost.models.declarations import Catalog
from pmavhost.vhost.definition import define_vhost


logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads ``config.yaml`` and the vhost resources under ``vhosts/``."""

    def __init__(self, config_dir: Path):
        """Initialize configuration manager."""
        self.config_dir = Path(config_dir)
        self.yaml = YAML(typ="safe")
        self.config: Optional[PhpMyAdminConfig] = None
        self.vhosts: Dict[str, Dict[str, Any]] = {}
        self._sources: Dict[str, Path] = {}

    def load(self):
        """Load all configuration files."""
        logger.info(f"Loading configuration from {self.config_dir}")
        self._load_main_config()
        self._load_vhosts()
        logger.info(f"Loaded {len(self.vhosts)} vhost(s)")

    def _load_main_config(self):
        """Load main configuration file, falling back to defaults."""
        config_file = self.config_dir / "config.yaml"
        if not config_file.exists():
            logger.debug(f"No main config at {config_file}, using defaults")
            self.config = PhpMyAdminConfig()
            return

        data = self._read_yaml(config_file) or {}
        try:
            self.config = PhpMyAdminConfig(**data)
            logger.debug(f"Loaded main config: {config_file}")
        except ValidationError as e:
            logger.error(f"Invalid main config: {e}")
            raise ConfigError(f"Invalid main config {config_file}: {e}") from e

    def _load_vhosts(self):
        """Load vhost resources, keyed by title."""
        vhosts_dir = self.config_dir / "vhosts"
        self.vhosts.clear()
        self._sources.clear()
        if not vhosts_dir.exists():
            logger.warning(f"Vhosts directory not found: {vhosts_dir}")
            return

        for yaml_file in sorted(vhosts_dir.glob("*.yaml")):
            data = self._read_yaml(yaml_file) or {}
            if not isinstance(data, dict):
                raise ConfigError(f"{yaml_file}: expected a mapping of vhost titles")
            for title, params in data.items():
                title = str(title)
                if title in self.vhosts:
                    raise ConfigError(
                        f"Duplicate vhost {title!r} in {yaml_file} "
                        f"(first defined in {self._sources[title]})"
                    )
                if params is None:
                    params = {}
                if not isinstance(params, dict):
                    raise ConfigError(f"{yaml_file}: vhost {title!r} must be a mapping")
                self.vhosts[title] = dict(params)
                self._sources[title] = yaml_file
            logger.debug(f"Loaded vhosts from {yaml_file}")

    def _read_yaml(self, file_path: Path) -> Any:
        """Read and parse YAML file."""
        try:
            return self.yaml.load(file_path.read_text())
        except YAMLError as e:
            logger.error(f"Error parsing {file_path}: {e}")
            raise ConfigError(f"Error parsing {file_path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading {file_path}: {e}")
            raise ConfigError(f"Error reading {file_path}: {e}") from e

    def get_vhost_params(self, title: str) -> Optional[Dict[str, Any]]:
        """Get raw parameters of a vhost by title."""
        return self.vhosts.get(title)

    def define(self, title: str, overrides: Optional[Dict[str, Any]] = None) -> Catalog:
        """Define one vhost, applying ``overrides`` over its configured parameters."""
        params = dict(self.vhosts.get(title, {}))
        params.update(overrides or {})
        return define_vhost(title, params, self.config)

    def catalogs(self) -> List[Catalog]:
        """Define every configured vhost."""
        return [self.define(title) for title in self.vhosts]
