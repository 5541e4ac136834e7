from .manager import get_secret_key_encryption_strategy, load_plugin, register_strategy

__all__ = ["get_secret_key_encryption_strategy", "load_plugin", "register_strategy"]
