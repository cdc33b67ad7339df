"""
Loguru sinks and shared state for ``Logger.io``.

Importing this module configures logging for the whole process: the default
loguru handler is replaced, stdlib ``logging`` is routed into loguru, and a
rotating file sink is added when ``DEBUG`` is on.
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
from pathlib import Path
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.logging.service_context import get_service_context


LOG_DIR = os.environ.get('TEST_LOG_DIR') or str(Path(__file__).resolve().parents[3] / 'logs')

# Payment references and guest national ids never reach a sink in clear text
SENSITIVE_KEYWORDS = {
    'transaction_id',
    'nid',
    'guest_nid',
}
MASK = '********'
MAX_CONTENT_LENGTH = 1000

# Attributes of a raised error appended to its ERROR line
ERROR_CONTEXT_FIELDS = ('package_id', 'seat_id', 'booking_id', 'minimum_advance')

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    TRACE_ID = 'trace_id'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def _bind_defaults() -> 'LoguruLogger':
    return loguru_logger.bind(
        **{
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.TRACE_ID: '',
            ExtraField.CHAIN_START_TIME: '',
            ExtraField.CALL_TARGET: '',
        }
    )


def _access_log_level(message: str) -> str | None:
    """
    Level for a granian access line such as
    '127.0.0.1 - "POST /api/booking/checkout HTTP/1.1" - 409 - 3ms'
    """
    parts = message.split('"')
    if len(parts) < 3 or ' HTTP/' not in parts[1]:
        return None
    status_parts = parts[2].split()
    if len(status_parts) < 2 or status_parts[0] != '-' or not status_parts[1].isdigit():
        return None
    status_code = int(status_parts[1])
    if status_code >= 500:
        return 'ERROR'
    # 4xx: rejected checkouts and holds
    if status_code >= 400:
        return 'WARNING'
    return 'INFO'


class InterceptHandler(logging.Handler):
    """Forwards stdlib records (granian, fastapi, opentelemetry) to loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()
        if record.levelno <= logging.DEBUG and 'Using selector:' in message:
            return

        level: str | int | None = _access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<m>{{extra[{ExtraField.TRACE_ID}]:<32}}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)

loguru_logger.remove()
custom_logger = _bind_defaults()

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

if settings.DEBUG:
    hour = datetime.now(timezone.utc).strftime('%Y-%m-%d_%H')
    prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
    custom_logger.add(
        f'{LOG_DIR}/{prefix}tour_booking_{hour}.log',
        format=io_log_format,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
        level=min_log_level,
    )

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
