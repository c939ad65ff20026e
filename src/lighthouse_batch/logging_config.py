"""Logging setup for a batch run.

Progress lines ("Lighthouse audit completed for ...") go to the console in a
short form; the optional log file keeps timestamps and logger names so a long
run can be reconstructed afterwards.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = "%(levelname)-7s %(message)s"
FILE_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# httpx logs every basic-auth check request at INFO; asyncio logs subprocess
# transport details for every Lighthouse invocation at DEBUG.
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure the root logger for the batch run.

    Args:
        level: Level name for this package's loggers; unknown names mean INFO
        log_file: Optional path of a file that receives the detailed format
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers = [console]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
