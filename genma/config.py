import os
import logging
from pathlib import Path
from typing import Optional
from platformdirs import user_config_dir
from .core.config import Config, ConfigManager


logger = logging.getLogger(__name__)


CONFIG_DIR = Path(
    os.environ.get("GENMA_CONFIG_DIR") or user_config_dir("genma")
)
CONFIG_FILE = CONFIG_DIR / "config.yaml"


def getflag(name, default=False):
    default = "true" if default else "false"
    return os.environ.get(name, default).lower() in ("true", "1")


# Populated by initialize_managers(), so importing this module performs
# no I/O.
config_mgr: Optional[ConfigManager] = None
config: Optional[Config] = None


def initialize_managers() -> Config:
    """
    Loads the user configuration. Safe to call more than once.
    """
    global config_mgr, config

    if config_mgr is not None and config is not None:
        return config

    logger.info(f"Initializing configuration from {CONFIG_DIR}")
    config_mgr = ConfigManager(CONFIG_FILE)
    config = config_mgr.config
    if getflag("GENMA_NO_SNAP"):
        config.canvas.snap_to_objects = False
        config.canvas.snap_to_grid = False
        logger.info("Snapping disabled by GENMA_NO_SNAP")
    return config
