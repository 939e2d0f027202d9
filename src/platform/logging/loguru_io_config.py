"""
Loguru setup shared by the whole service

- One bound logger (`custom_logger`) carrying the service context
- stdout sink always, rotating file sink when enabled in settings
- stdlib logging (uvicorn/granian access logs, dependency-injector, otel)
  is routed into loguru through `InterceptHandler`
"""

from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
import logging
import os
from pathlib import Path
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import Settings, settings
from src.platform.logging.service_context import get_service_context


SENSITIVE_KEYWORDS = frozenset({'password', 'token', 'secret'})

DEPTH_LINE = '│'

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


# (lowest status, level) checked top-down
_HTTP_STATUS_LEVELS = (
    (500, 'CRITICAL'),
    (400, 'ERROR'),
    (300, 'WARNING'),
    (200, 'SUCCESS'),
    (0, 'INFO'),
)


def http_status_level(message: str) -> str | None:
    """
    Map an access-log line to a log level by its status code.

    Format: '127.0.0.1:51234 - "POST /events/1/reserve HTTP/1.1" 201'
    Anything that does not look like an access-log line returns None.
    """
    if ' - "' not in message or ' HTTP/' not in message:
        return None

    _, _, tail = message.rpartition('"')
    for token in tail.split():
        if token.isdigit():
            status_code = int(token)
            return next(level for floor, level in _HTTP_STATUS_LEVELS if status_code >= floor)
    return None


def _default_extra() -> dict[str, Any]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


class InterceptHandler(logging.Handler):
    """Forward stdlib log records into loguru, keeping the original caller frame."""

    def __init__(self) -> None:
        super().__init__()
        self._bound: 'LoguruLogger | None' = None

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()

        if record.levelno <= logging.DEBUG and 'Using selector:' in message:
            return

        level: str | int | None = http_status_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        if self._bound is None:
            self._bound = loguru_logger.bind(**_default_extra())
        self._bound.opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _log_file_path(config: Settings) -> Path:
    # Tests redirect file output so a run never writes into the service log dir
    test_log_dir = os.environ.get('TEST_LOG_DIR')
    log_dir = Path(test_log_dir) if test_log_dir else config.LOG_DIR
    prefix = 'test_' if test_log_dir else ''
    return log_dir / f'{prefix}{datetime.now().astimezone().strftime("%Y-%m-%d_%H")}.log'


def configure_sinks(config: Settings) -> None:
    """Replace every loguru sink with the ones described by `config`."""
    loguru_logger.remove()
    level = config.effective_log_level

    loguru_logger.add(sys.stdout, format=io_log_format, level=level, enqueue=True)
    if config.log_to_file:
        loguru_logger.add(
            str(_log_file_path(config)),
            format=io_log_format,
            rotation=config.LOG_FILE_ROTATION,
            retention=config.LOG_FILE_RETENTION,
            compression='gz',
            enqueue=True,
            level=level,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


configure_sinks(settings)
custom_logger = loguru_logger.bind(**_default_extra())
