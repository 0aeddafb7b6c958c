"""Logger - Configuracao de logging do coursequiz.

Fornece:
- `get_logger` para obter um logger sob o namespace ``coursequiz``
- `JSONFormatter` para registros em JSON de uma linha
- `configure_logging` para anexar um handler stdout ao logger do pacote
"""

import json
import logging
import sys
import time

ROOT_LOGGER = "coursequiz"


def get_logger(name: str) -> logging.Logger:
    """Retorna logger filho de ``coursequiz``.

    Args:
        name: Nome curto do componente (ex: "router", "server")
    """
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class JSONFormatter(logging.Formatter):
    """Formata registros como JSON compacto (nivel, timestamp, logger, mensagem)."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "level": record.levelname,
            "ts": round(time.time(), 3),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(level: int | str = "INFO", json_output: bool = False) -> logging.Logger:
    """Configura o logger ``coursequiz`` com um handler em stdout.

    Chamadas repetidas substituem o handler anterior em vez de duplicar saida.

    Args:
        level: Nivel de log (nome ou inteiro)
        json_output: Se True, usa JSONFormatter; senao, formato texto

    Returns:
        O logger raiz do pacote
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_coursequiz_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler._coursequiz_handler = True  # type: ignore[attr-defined]
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )

    logger.addHandler(handler)
    logger.setLevel(level if isinstance(level, int) else str(level).upper())
    return logger
