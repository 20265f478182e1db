"""
Configuración de logging de la aplicación.
Cada módulo usa su propio logger con logging.getLogger(__name__).
"""

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class ColoredFormatter(logging.Formatter):
    """Formatter con colores para la consola"""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        message = super().format(record)
        return f"{color}{message}{self.COLORS['RESET']}"


def setup_logging(level: str | None = None, colored: bool = True):
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Quitamos handlers previos para no duplicar líneas (uvicorn --reload)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    formatter_cls = ColoredFormatter if colored else logging.Formatter
    console_handler.setFormatter(formatter_cls(LOG_FORMAT))
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # SQLAlchemy es muy ruidoso en INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configurado (nivel %s)", logging.getLevelName(log_level))
