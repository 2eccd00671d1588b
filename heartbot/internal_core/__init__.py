from .config import HeartBotConfig, load_config

__all__ = ["HeartBotConfig", "load_config"]
