from .loader import ConfigError, InventoryIOConfig, default_config, load_config

__all__ = [
    "ConfigError",
    "InventoryIOConfig",
    "default_config",
    "load_config",
]
