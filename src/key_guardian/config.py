# Configuration for the strategies (option keys, defaults, YAML loading).

from .utils.config import (
    DEFAULT_CONFIG,
    GuardianConfig,
    LoggingConfig,
    Property,
    dump_default_config,
    load_config,
)

__all__ = ["DEFAULT_CONFIG", "GuardianConfig", "LoggingConfig", "Property", "dump_default_config", "load_config"]
