from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


LOG_DIR = os.environ.get('TEST_LOG_DIR', LOG_DIR)

SENSITIVE_KEYWORDS = frozenset(
    {
        'password',
        'smtp_password',
        'secret_key',
        'token',
        'card_number',
    }
)
MASK = '********'
MAX_CONTENT_LENGTH = 2000

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def _bind_defaults() -> 'LoguruLogger':
    return loguru_logger.bind(
        **{
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.CHAIN_START_TIME: '',
            ExtraField.CALL_TARGET: '',
        }
    )


class InterceptHandler(logging.Handler):
    """Route stdlib logging (uvicorn, sqlalchemy, aiosmtplib) into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


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


loguru_logger.remove()
custom_logger = _bind_defaults()

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

# File sink for local runs and tests; containers ship stdout only
if settings.DEBUG:
    hour_stamp = datetime.now(timezone.utc).strftime('%Y-%m-%d_%H')
    log_prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
    custom_logger.add(
        f'{LOG_DIR}/{log_prefix}{hour_stamp}.log',
        format=io_log_format,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
        level=min_log_level,
    )

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
for noisy in ('aiosqlite', 'asyncio'):
    logging.getLogger(noisy).setLevel(logging.INFO)
