"""Quiz Config - Configuracao do servico via variaveis de ambiente."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .core.exceptions import ConfigurationError

STORAGE_BACKENDS = ("memory", "agentfs")
_TRUE_VALUES = {"1", "true", "yes", "on"}


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be a number, got {raw!r}", details={"variable": name}
        ) from e


@dataclass
class QuizConfig:
    """Configuracao do servico de quiz.

    Attributes:
        model: Modelo Claude usado na geracao (QUIZ_MODEL)
        inflation_factor: Multiplicador do pedido ao modelo (QUIZ_INFLATION_FACTOR)
        generation_timeout: Limite da chamada ao modelo em segundos (QUIZ_GENERATION_TIMEOUT)
        storage_backend: "memory" ou "agentfs" (QUIZ_STORAGE_BACKEND)
        agentfs_id: ID do AgentFS quando o backend e agentfs (QUIZ_AGENTFS_ID)
        log_level: Nivel de log (LOG_LEVEL)
        log_json: Logs em JSON de uma linha (LOG_JSON)
        cors_origins: Origens liberadas no CORS (CORS_ORIGINS, separadas por virgula)

    Example:
        >>> config = QuizConfig.from_env({"QUIZ_INFLATION_FACTOR": "2.0"})
        >>> config.inflation_factor
        2.0
    """

    model: str = "haiku"
    inflation_factor: float = 1.8
    generation_timeout: float = 120.0
    storage_backend: str = "memory"
    agentfs_id: str = "coursequiz"
    log_level: str = "INFO"
    log_json: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self):
        if self.inflation_factor < 1.0:
            raise ConfigurationError(
                f"inflation_factor must be >= 1.0, got {self.inflation_factor}",
                details={"variable": "QUIZ_INFLATION_FACTOR"},
            )
        if self.generation_timeout <= 0:
            raise ConfigurationError(
                f"generation_timeout must be positive, got {self.generation_timeout}",
                details={"variable": "QUIZ_GENERATION_TIMEOUT"},
            )
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"storage_backend must be one of {STORAGE_BACKENDS}, got {self.storage_backend!r}",
                details={"variable": "QUIZ_STORAGE_BACKEND"},
            )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> QuizConfig:
        """Carrega configuracao do ambiente (ou de um mapa explicito).

        Raises:
            ConfigurationError: Valor invalido em alguma variavel
        """
        env = os.environ if env is None else env

        origins = [o.strip() for o in env.get("CORS_ORIGINS", "*").split(",") if o.strip()]

        return cls(
            model=env.get("QUIZ_MODEL", "haiku").strip() or "haiku",
            inflation_factor=_float(env, "QUIZ_INFLATION_FACTOR", 1.8),
            generation_timeout=_float(env, "QUIZ_GENERATION_TIMEOUT", 120.0),
            storage_backend=env.get("QUIZ_STORAGE_BACKEND", "memory").strip().lower(),
            agentfs_id=env.get("QUIZ_AGENTFS_ID", "coursequiz").strip() or "coursequiz",
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
            log_json=env.get("LOG_JSON", "false").strip().lower() in _TRUE_VALUES,
            cors_origins=origins or ["*"],
        )
