# =============================================================================
# CONFIGURAÇÃO DO PORTAL - Quiz Service
# =============================================================================
# Valores lidos de variáveis de ambiente (ou .env via python-dotenv)
# =============================================================================

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "data/portal.db"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"{name} inválido ({raw!r}), usando {default}")
        return default
    if value < minimum:
        logger.warning(f"{name} abaixo do mínimo ({value}), usando {default}")
        return default
    return value


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class PortalConfig:
    """Configuração do serviço de quizzes."""

    database_path: str = DEFAULT_DB_PATH
    admin_name: str = "admin"
    code_length: int = 6
    code_max_retries: int = 5
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "PortalConfig":
        """Cria configuração a partir das variáveis de ambiente."""
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            log_level = "INFO"

        return cls(
            database_path=os.getenv("QUIZ_DB_PATH", DEFAULT_DB_PATH),
            admin_name=os.getenv("ADMIN_NAME", "admin") or "admin",
            code_length=_env_int("QUIZ_CODE_LENGTH", 6),
            code_max_retries=_env_int("QUIZ_CODE_MAX_RETRIES", 5),
            cors_origins=_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
            log_level=log_level,
        )

    def to_dict(self) -> dict[str, Any]:
        """Configuração exposta no /health (sem segredos)."""
        return {
            "database": {"path": self.database_path},
            "quiz": {
                "code_length": self.code_length,
                "code_max_retries": self.code_max_retries,
            },
            "cors_origins": self.cors_origins,
            "log_level": self.log_level,
        }


_config: Optional[PortalConfig] = None


def get_config() -> PortalConfig:
    """Retorna a configuração do processo (criada na primeira chamada)."""
    global _config
    if _config is None:
        _config = PortalConfig.from_env()
    return _config


def reload_config() -> PortalConfig:
    """Relê as variáveis de ambiente e substitui a configuração atual."""
    global _config
    _config = PortalConfig.from_env()
    return _config
