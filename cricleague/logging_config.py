"""Logging setup for the command line tools.

Library modules only ever call ``logging.getLogger('cricleague.<module>')``;
handlers are attached here, once, by whichever script is running.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = 'cricleague'

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def setup_logging(
    verbose: bool = False,
    log_dir: Optional[Path | str] = None,
    quiet: bool = False,
) -> logging.Logger:
    """
    Attach handlers to the ``cricleague`` logger.

    Args:
        verbose: Log DEBUG instead of INFO
        log_dir: Also write a timestamped log file here (no file when None)
        quiet: Console shows warnings and errors only, for scripts that
            print their own report

    Returns:
        The configured ``cricleague`` logger

    Calling this again replaces (and closes) the handlers from the previous
    call, so tests and long-lived processes don't leak open log files.
    """
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING if quiet else level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'{LOGGER_NAME}_{datetime.now():%Y%m%d_%H%M%S}.log'
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)
        logger.debug(f'Logging to {log_file}')

    return logger
