"""TOML-based configuration provider.

Config loading priority (highest to lowest):
1. Local: <root>/.brio.toml (project-specific)
2. Global: ~/.config/brio/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path

from brio.domain.config import BrioConfig
from brio.shared.config_io import (
    get_global_config_path,
    get_local_config_path,
    load_config_data,
)

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Implements config cascade:
    1. Load global config if present
    2. Load local config if present
    3. Local values override global values (key-level merge per section)
    4. Missing values fall back to built-in defaults

    Invalid configs are ignored with a warning.
    """

    def load(self, root: Path) -> BrioConfig:
        """Load configuration with global fallback.

        Args:
            root: Scan root that may contain .brio.toml

        Returns:
            BrioConfig instance with merged global/local values or defaults
        """
        config = BrioConfig.default()

        global_path = get_global_config_path()
        if global_path.exists():
            try:
                config = BrioConfig.from_partial(config, load_config_data(global_path))
                logger.debug("Loaded global config from %s", global_path)
            except (FileNotFoundError, ValueError) as e:
                logger.warning(
                    "Failed to parse global config at %s: %s. Ignoring global config.",
                    global_path,
                    e,
                )

        local_path = get_local_config_path(root)
        if local_path.exists():
            try:
                config = BrioConfig.from_partial(config, load_config_data(local_path))
                logger.debug("Loaded local config from %s", local_path)
            except (FileNotFoundError, ValueError) as e:
                logger.warning(
                    "Failed to parse %s: %s. Using global/default configuration.",
                    local_path,
                    e,
                )

        return config
