"""
Конфигурация движка маркетплейса

Источник значений: явные аргументы или переменные окружения
MARKETPLACE_VALIDATE_CONTRACTS / MARKETPLACE_LOG_LEVEL /
MARKETPLACE_BUFFER_EVENTS.
Нераспознанные значения заменяются безопасными дефолтами.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


ENV_VALIDATE_CONTRACTS = "MARKETPLACE_VALIDATE_CONTRACTS"
ENV_LOG_LEVEL = "MARKETPLACE_LOG_LEVEL"
ENV_BUFFER_EVENTS = "MARKETPLACE_BUFFER_EVENTS"

DEFAULT_LOG_LEVEL = "WARNING"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in _TRUE_VALUES:
        return True
    if v in _FALSE_VALUES:
        return False
    return default


def _parse_log_level(raw: Optional[str]) -> str:
    if raw is None or not raw.strip():
        return DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация MarketplaceEngine.

    - validate_contracts: проверять каждую записываемую запись по JSON Schema
    - log_level: уровень для configure_logging (сам движок handlers не ставит)
    - buffer_events: копить события до drain_events() (иначе только подписчики)
    """

    validate_contracts: bool = True
    log_level: str = DEFAULT_LOG_LEVEL
    buffer_events: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """
        Сборка конфигурации из переменных окружения.

        Args:
            environ: источник переменных (по умолчанию os.environ)
        """
        env = os.environ if environ is None else environ
        return cls(
            validate_contracts=_parse_bool(env.get(ENV_VALIDATE_CONTRACTS), True),
            log_level=_parse_log_level(env.get(ENV_LOG_LEVEL)),
            buffer_events=_parse_bool(env.get(ENV_BUFFER_EVENTS), True),
        )


def configure_logging(config: EngineConfig) -> None:
    """Настройка логирования для хост-приложения (вызывается хостом, не движком)."""
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
