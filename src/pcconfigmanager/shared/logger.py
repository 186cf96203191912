import logging
import sys
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"

# marks the handler this module installs so repeated calls reuse it
_HANDLER_NAME = "pcconfigmanager-console"


def resolve_log_level(level: Union[str, int]) -> int:
    """
    Turn a level name ('debug', 'INFO', ...) or a logging constant into an int.

    Raises:
        ValueError: unknown level name
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(
    level: Union[str, int], *, stream: Optional[TextIO] = None
) -> logging.Handler:
    """
    Set the root log level and make sure log lines reach stderr.

    The console handler is created once; later calls only change its level
    (and its stream when one is given). Handlers configured by the host
    application, e.g. pytest's caplog, are left alone apart from the level.

    Returns:
        the console handler owned by this package
    """
    numeric = resolve_log_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric)

    handler = next((h for h in root_logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
    elif stream is not None and isinstance(handler, logging.StreamHandler):
        handler.setStream(stream)

    handler.setLevel(numeric)
    return handler
