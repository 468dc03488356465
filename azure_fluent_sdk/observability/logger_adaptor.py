"""Named loggers for the SDK, backed by loguru."""

import sys
from typing import Any, Dict, Optional

from loguru import logger as _loguru_logger

from azure_fluent_sdk.constants import LOG_FORMAT, LOG_LEVEL

_loggers: Dict[str, "SdkLogger"] = {}
_sink_configured = False


def _configure_sink() -> None:
    global _sink_configured
    if _sink_configured:
        return
    _loguru_logger.remove()
    _loguru_logger.configure(extra={"logger_name": "azure_fluent_sdk"})
    _loguru_logger.add(sys.stderr, level=LOG_LEVEL, format=LOG_FORMAT)
    _sink_configured = True


class SdkLogger:
    """Logger for one SDK module.

    Every record carries ``logger_name`` in its loguru ``extra`` so the sink
    format can show which module emitted it. Records are attributed to the
    caller of ``info``/``debug``/... rather than to this class.

    Attributes:
        name (str): Name the records are bound to.
    """

    def __init__(self, name: str, **extra: Any) -> None:
        self.name = name
        self._extra = extra
        self._log = _loguru_logger.bind(logger_name=name, **extra)

    def bind(self, **extra: Any) -> "SdkLogger":
        """Return a logger for the same name with extra context on every record."""
        return SdkLogger(self.name, **{**self._extra, **extra})

    def _emit(self, level: str, msg: str, args: tuple, kwargs: dict) -> None:
        self._log.opt(depth=2).log(level, msg, *args, **kwargs)

    def log(self, level: str, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit(level, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit("INFO", msg, args, kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit("DEBUG", msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit("WARNING", msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit("ERROR", msg, args, kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit("CRITICAL", msg, args, kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        # Attaches the active exception's traceback.
        self._log.opt(depth=1, exception=True).error(msg, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> SdkLogger:
    """Return the cached logger for ``name``, creating it on first use.

    Args:
        name (Optional[str]): Logger name, usually ``__name__`` of the caller.

    Returns:
        SdkLogger: Logger bound to ``name``.
    """
    _configure_sink()
    if name is None:
        name = "azure_fluent_sdk.observability.logger_adaptor"
    if name not in _loggers:
        _loggers[name] = SdkLogger(name)
    return _loggers[name]


default_logger = get_logger()
