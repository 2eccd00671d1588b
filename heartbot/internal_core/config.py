from __future__ import annotations

import os
from dataclasses import dataclass


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_int_clamped(name: str, default: int, *, min_value: int, max_value: int) -> int:
    return max(min_value, min(max_value, _getenv_int(name, default)))


def _getenv_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class HeartBotConfig:
    HEARTBOT_MAX_TIPS: int
    HEARTBOT_LOG_LEVEL: str
    HEARTBOT_CORS_ORIGINS: tuple[str, ...]
    HEARTBOT_MAX_TEXT_CHARS: int

    def log_level_name(self) -> str:
        level = self.HEARTBOT_LOG_LEVEL.strip().upper()
        return level if level in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO"


def load_config() -> HeartBotConfig:
    return HeartBotConfig(
        HEARTBOT_MAX_TIPS=_getenv_int_clamped("HEARTBOT_MAX_TIPS", 6, min_value=1, max_value=20),
        HEARTBOT_LOG_LEVEL=_getenv_str("HEARTBOT_LOG_LEVEL", "INFO"),
        HEARTBOT_CORS_ORIGINS=_getenv_list("HEARTBOT_CORS_ORIGINS", ("*",)),
        HEARTBOT_MAX_TEXT_CHARS=_getenv_int_clamped(
            "HEARTBOT_MAX_TEXT_CHARS", 2000, min_value=1, max_value=20000
        ),
    )
