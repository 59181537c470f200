from pathlib import Path
from typing import Dict, Any, List, Optional
from config.types import WebpageSettings
import logging
import os

# Prefix of every environment variable read by the manager
ENV_PREFIX = "WEBPAGE_"


class EnvironmentManager:
    """
    Environment manager that resolves webpage settings from defaults,
    a .env file and the OS environment, in that order.
    """

    _instance = None

    # Default settings with their types
    DEFAULT_SETTINGS = {
        "timeout": (30.0, float),
        "user_agent": (None, str),
        "browser_type": ("chromium", str),
        "output_path": ("output", str),
        "log_level": ("WARNING", str),
    }

    # Each setting can be set via its prefixed uppercase env var
    ENV_MAPPING = {
        f"{ENV_PREFIX}{setting.upper()}": setting for setting in DEFAULT_SETTINGS.keys()
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize environment with default values"""
        self.env_variables: Dict[str, str] = {}
        self.settings: Dict[str, Any] = {}
        self.env_file: Optional[Path] = None
        self.logger = logging.getLogger(__name__)

        for key, (default_value, _) in self.DEFAULT_SETTINGS.items():
            self.settings[key] = default_value

    def _convert_value(self, value: str, target_type: type) -> Any:
        """Convert string value to target type"""
        if target_type == bool:
            return value.lower() == "true"
        return target_type(value)

    def _apply_variable(self, key: str, value: str):
        """Store a variable and update the mapped setting, if any"""
        self.env_variables[key] = value
        setting_name = self.ENV_MAPPING.get(key)
        if setting_name is None:
            return
        _, target_type = self.DEFAULT_SETTINGS[setting_name]
        try:
            self.settings[setting_name] = self._convert_value(value, target_type)
        except ValueError as e:
            self.logger.warning(f"Ignoring invalid value for {key}: {e}")

    def _env_file_paths(self) -> List[Path]:
        env_file_paths = [Path.cwd() / ".env"]

        # Home directory may not be resolvable in some sandboxes
        try:
            env_file_paths.append(Path.home() / ".env")
        except (RuntimeError, OSError):
            pass

        return env_file_paths

    def _load_from_env_file(self):
        """Find and load variables from the first .env file found"""
        for env_path in self._env_file_paths():
            if env_path.exists() and env_path.is_file():
                self.logger.debug(f"Loading environment from: {env_path}")
                self._parse_env_file(env_path)
                self.env_file = env_path
                return

        self.logger.debug("No .env file found, using defaults and OS environment")

    def _parse_env_file(self, env_file_path: Path):
        """Parse a .env file and load variables into environment"""
        try:
            with open(env_file_path, "r") as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        key = key.strip()
                        value = value.strip()

                        # Remove quotes if present
                        if (value.startswith('"') and value.endswith('"')) or (
                            value.startswith("'") and value.endswith("'")
                        ):
                            value = value[1:-1]

                        self._apply_variable(key, value)

        except OSError as e:
            self.logger.warning(f"Error parsing .env file {env_file_path}: {e}")

    def load(self):
        """Load settings from the .env file, then from the OS environment"""
        self._load_from_env_file()

        for key, value in os.environ.items():
            if key in self.ENV_MAPPING:
                self._apply_variable(key, value)

        return self

    def get_setting(self, name: str, default: Any = None) -> Any:
        """Get a setting value by name"""
        value = self.settings.get(name)
        return default if value is None else value

    def get_settings(self) -> WebpageSettings:
        """Get all settings as a validated model"""
        return WebpageSettings(**self.settings)

    def get_timeout(self) -> float:
        """Get the default export timeout in seconds"""
        return self.get_setting("timeout", 30.0)

    def get_output_path(self) -> str:
        """Get the default output file path"""
        return self.get_setting("output_path", "output")


# Create a global instance
env_manager = EnvironmentManager()
