"""Process-wide loguru setup.

Sinks are installed once; ``get_logger`` only binds the module name. Session
code binds ``session_id`` as well, so a whole refinement run can be pulled out
of ``app.log`` with one grep.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger
from loguru._logger import Logger as LoguruLogger

from prompt_refiner.config import settings

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> "
    "<magenta>[{extra[session_id]}]</magenta> - "
    "<level>{message}</level>"
)
_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
    "{extra[name]}:{function}:{line} | session={extra[session_id]} - {message}"
)


@dataclass
class _SinkState:
    handler_ids: list[int] = field(default_factory=list)
    default_removed: bool = False


_STATE = _SinkState()


def configure_logging(force: bool = False) -> None:
    """Install the stderr, ``app.log`` and ``errors.log`` sinks.

    Runs once per process unless ``force`` is set, in which case only the
    sinks added here are replaced. Sinks added by other code after the first
    call are left alone.
    """
    if _STATE.handler_ids and not force:
        return

    for handler_id in _STATE.handler_ids:
        logger.remove(handler_id)
    _STATE.handler_ids.clear()

    if not _STATE.default_removed:
        # first configuration drops loguru's default stderr handler
        logger.remove()
        _STATE.default_removed = True

    logger.configure(extra={"name": "-", "session_id": "-"})

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    _STATE.handler_ids.append(
        logger.add(
            sys.stderr,
            format=_CONSOLE_FORMAT,
            level=settings.log_level,
            colorize=True,
        )
    )
    # every turn, for replaying a session
    _STATE.handler_ids.append(
        logger.add(
            log_dir / "app.log",
            format=_FILE_FORMAT,
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )
    )
    _STATE.handler_ids.append(
        logger.add(
            log_dir / "errors.log",
            format=_FILE_FORMAT,
            level="ERROR",
            rotation="10 MB",
            retention="30 days",
            compression="zip",
        )
    )


def get_logger(name: str) -> LoguruLogger:
    """Return the shared logger bound to ``name`` (usually ``__name__``)."""
    configure_logging()
    return logger.bind(name=name)  # type: ignore[return-value]
