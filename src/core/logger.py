import logging
import sys

from core.config import settings

ROOT_LOGGER_NAMES = ("core", "domains", "api", "main")


def setup_logging(log_level: str | None = None) -> None:
    """애플리케이션 로거 초기화. main 에서 앱 생성 시 한 번 호출된다."""
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    for name in ROOT_LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False

    if not settings.DB_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
