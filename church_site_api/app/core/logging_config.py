"""
Logging setup for the API process.

``setup_logging`` installs a console handler and, when ``LOG_FILE`` is
set, a file handler on the root logger.  Handlers are tagged by name
so calling it again (every ``create_app`` does) only adjusts the level
and never duplicates output.  Modules log through
``logging.getLogger(__name__)``.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "church_site.console"
FILE_HANDLER = "church_site.file"


def _has_handler(root: logging.Logger, name: str) -> bool:
    return any(handler.get_name() == name for handler in root.handlers)


def _add_handler(root: logging.Logger, handler: logging.Handler, name: str) -> None:
    handler.set_name(name)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(handler)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for the API.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"``; unknown names mean ``INFO``.
    logfile : Optional[str]
        Also append log records to this file.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not _has_handler(root, CONSOLE_HANDLER):
        _add_handler(root, logging.StreamHandler(), CONSOLE_HANDLER)

    if logfile and not _has_handler(root, FILE_HANDLER):
        path = Path(logfile).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        _add_handler(root, logging.FileHandler(path, encoding="utf-8"), FILE_HANDLER)
