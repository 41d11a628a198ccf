import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .env import LOG_DIR_VAR, LOG_LEVEL_VAR, env_get

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(
    level: Optional[Union[int, str]] = None,
    log_dir: Optional[Union[str, Path]] = None,
):
    """Setup basic logging configuration

    Level and log directory default to STRINGFILTER_LOG_LEVEL and
    STRINGFILTER_LOG_DIR. Without a log directory only the console is used.
    """
    if level is None:
        level = env_get(LOG_LEVEL_VAR, "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if log_dir is None:
        log_dir = env_get(LOG_DIR_VAR)

    handlers = [logging.StreamHandler()]
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(
                log_dir / f"stringfilter_{datetime.now().strftime('%Y-%m-%d')}.log"
            )
        )

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    return logging.getLogger(__name__)


def log_function_call(func_name: str, **kwargs):
    """Log function calls with parameters"""
    logger = logging.getLogger(__name__)
    logger.info(f"Calling {func_name} with params: {kwargs}")
