import sys
from pathlib import Path

from loguru import logger

from config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def setup_logger(
    *,
    level: str | None = None,
    json_logs: bool | None = None,
    log_dir: str | Path | None = None,
) -> Path:
    """Configure loguru: console at ``level``, DEBUG file under ``log_dir``.

    Unset arguments come from settings (LOG_LEVEL, LOG_JSON, LOG_DIR).
    Returns the log directory.
    """
    level = (level or settings.log_level).upper()
    serialize = settings.log_json if json_logs is None else json_logs
    directory = Path(log_dir if log_dir is not None else settings.log_dir)

    logger.remove()
    if serialize:
        logger.add(sys.stdout, serialize=True, level=level)
    else:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level=level, colorize=True)

    logger.add(
        directory / "networth_{time:YYYY-MM-DD}.log",
        rotation="20 MB",
        retention="7 days",
        compression="gz",
        level="DEBUG",
        serialize=serialize,
    )
    return directory
