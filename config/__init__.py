"""
Webpage Configuration Package.

This package contains the environment settings manager used by the
command line tool.
"""

from config.manager import EnvironmentManager, env_manager
from config.types import WebpageSettings

# Re-export the singleton instance for easy access
env = env_manager

__all__ = [
    "EnvironmentManager",
    "env_manager",
    "env",
    "WebpageSettings",
]
