import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from aoc_bot.config import Config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Third-party loggers that are too chatty at DEBUG
NOISY_LOGGERS = ('discord.gateway', 'discord.http', 'aiohttp.access')


def setup_logger(name: str, log_dir: Optional[Path] = Path('logs')) -> logging.Logger:
    """Setup a logger writing to stdout and to a per-day file in log_dir.

    Pass log_dir=None to log to stdout only.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = logging.DEBUG if Config.DEBUG else logging.INFO
    logger.setLevel(log_level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(
            log_dir / f'aoc_bot_{datetime.now().strftime("%Y%m%d")}.log',
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger
