"""Configuration management."""

from pathlib import Path
from typing import Optional

import platformdirs
import tomli
import tomli_w
from pydantic import ValidationError

from partfit.exceptions import ConfigValidationError
from partfit.models import AppConfig


class ConfigManager:
    """Manages the TOML configuration file."""

    CONFIG_FILENAME = "config.toml"

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """Initialize config manager.

        Args:
            config_dir: Override config directory (for testing)
        """
        if config_dir:
            self._config_dir = Path(config_dir)
        else:
            self._config_dir = Path(platformdirs.user_config_dir("partfit"))

    @property
    def config_path(self) -> Path:
        """Path to config file."""
        return self._config_dir / self.CONFIG_FILENAME

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def save(self, config: AppConfig) -> None:
        """Write configuration to config.toml, creating the directory."""
        self._config_dir.mkdir(parents=True, exist_ok=True)
        config_dict = config.model_dump(mode="json", exclude_none=True)
        self.config_path.write_text(tomli_w.dumps(config_dict), encoding="utf-8")

    def load(self) -> AppConfig:
        """Load configuration, falling back to defaults when no file exists.

        Returns:
            Loaded and validated AppConfig

        Raises:
            ConfigValidationError: If the file is not valid TOML or has bad values
        """
        if not self.exists:
            return AppConfig()

        try:
            config_dict = tomli.loads(self.config_path.read_text(encoding="utf-8"))
        except tomli.TOMLDecodeError as e:
            raise ConfigValidationError(str(self.config_path), str(e))

        try:
            return AppConfig.model_validate(config_dict)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigValidationError("config", errors)

    def delete(self) -> bool:
        """Delete configuration file.

        Returns:
            True if file was deleted, False if it didn't exist
        """
        if self.exists:
            self.config_path.unlink()
            return True
        return False
