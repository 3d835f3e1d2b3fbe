from .load import ConfigLoadError, load_config
from .model import CONFIG_FILENAME, ViewsConfig

__all__ = ["ViewsConfig", "CONFIG_FILENAME", "ConfigLoadError", "load_config"]
