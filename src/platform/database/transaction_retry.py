from functools import wraps
from typing import Any, Awaitable, Callable, ParamSpec, TypeVar

import anyio

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ConflictRetryableError
from src.platform.logging.loguru_io import Logger


_P = ParamSpec('_P')
_T = TypeVar('_T')


def retry_on_conflict(
    func: Callable[_P, Awaitable[_T]] | None = None,
    *,
    max_attempts: int | None = None,
    backoff: float | None = None,
) -> Any:
    """
    Re-run an async transactional function when it fails with ConflictRetryableError.

    The wrapped function must open its own unit of work so every attempt runs
    in a fresh transaction. The last failure is re-raised to the caller.
    """

    def decorator(fn: Callable[_P, Awaitable[_T]]) -> Callable[_P, Awaitable[_T]]:
        @wraps(fn)
        async def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _T:
            attempts = max(1, max_attempts or settings.TRANSACTION_MAX_ATTEMPTS)
            delay = settings.TRANSACTION_RETRY_BACKOFF if backoff is None else backoff
            attempt = 1
            while True:
                try:
                    return await fn(*args, **kwargs)
                except ConflictRetryableError as e:
                    if attempt >= attempts:
                        Logger.base.error(
                            f'❌ [RETRY] {fn.__qualname__} gave up after {attempt} attempts: {e}'
                        )
                        raise
                    Logger.base.warning(
                        f'🔁 [RETRY] {fn.__qualname__} attempt {attempt}/{attempts} conflicted, retrying'
                    )
                    await anyio.sleep(delay * attempt)
                    attempt += 1

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
