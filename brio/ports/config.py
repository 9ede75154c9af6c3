"""Configuration provider port.

Defines the interface for loading application configuration.
"""

from pathlib import Path
from typing import Protocol

from brio.domain.config import BrioConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, root: Path) -> BrioConfig:
        """Load the effective configuration for a scan root.

        Args:
            root: Directory being scanned (may hold a .brio.toml)

        Returns:
            BrioConfig instance with loaded or default values

        Note:
            Implementations should fall back to defaults if a config file is
            missing or invalid.
        """
        ...
