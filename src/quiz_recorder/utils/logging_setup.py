import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s'
CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# Libraries that log connection chatter at INFO/DEBUG during a session
NOISY_LOGGERS = ('asyncio', 'aiohttp.access', 'aiohttp.client')


def setup_logging(settings: Dict[str, Any]) -> List[logging.Handler]:
    """
    Route recorder logs to a rotating file and the console.

    The file keeps the full record (logger, function and line); the console
    gets a short timestamped line so the session can be followed live.

    Returns:
        The handlers attached to the root logger
    """
    log_settings = settings['logging']
    log_file = log_settings['file']
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    level = getattr(logging, str(log_settings['level']).upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=log_settings.get('max_size', 10485760),
        backupCount=log_settings.get('backup_count', 5),
        encoding='utf-8'
    )
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))

    handlers = [file_handler, console_handler]
    for handler in handlers:
        handler.setLevel(level)
        root_logger.addHandler(handler)

    if level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info(f"📼 Quiz recorder logging started - level {log_settings['level']}, file {log_file}")
    return handlers
