import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Mapping, Optional

from aliasgui.dialects import Dialect
from aliasgui.locator import ConfigLocator

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "ALIAS_CONFIG_PATH"


class Config:
    """Manage aliasgui settings"""

    DEFAULT_CONFIG = {
        "config_path": None,
        "dialect": None,
        "log_level": "WARNING",
        "max_body_size": 100 * 1024,
        "fuzzy_threshold": 60,
    }

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / ".aliasgui"
        self.config_path = self.config_dir / "config.json"
        self.config = self.load()

    def load(self) -> Dict[str, Any]:
        """Load configuration from file"""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    user_config = json.load(f)
                    return {**self.DEFAULT_CONFIG, **user_config}
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable settings file %s: %s", self.config_path, e)
        return self.DEFAULT_CONFIG.copy()

    def save(self) -> None:
        """Save configuration to file"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        return self.config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value"""
        self.config[key] = value
        self.save()

    def resolve_config_path(
        self,
        explicit: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        locator: Optional[ConfigLocator] = None,
    ) -> Path:
        """Pick the shell config to manage: flag, env, settings, platform default"""
        env = env if env is not None else os.environ
        for candidate in (explicit, env.get(CONFIG_PATH_ENV), self.get("config_path")):
            if candidate:
                return Path(candidate).expanduser()
        return (locator or ConfigLocator(env=env)).default_config_path()

    def resolve_dialect(self, explicit: Optional[str] = None, platform: Optional[str] = None) -> Dialect:
        """Pick the dialect: flag, settings, then the host platform"""
        name = explicit or self.get("dialect")
        if name:
            return Dialect.from_name(name)
        return Dialect.detect(platform)
