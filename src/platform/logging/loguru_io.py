from collections.abc import Awaitable
from functools import wraps
from inspect import iscoroutinefunction
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import ExtraField, custom_logger
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    enter_call,
    get_chain_start_time,
    mask_sensitive,
    reset_call_depth,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])


class LoguruIO:
    """Decorator logging the inputs, outputs and failures of one function"""

    depth = 2

    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate: bool = True
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate = truncate
        self.extra: dict[str, Any] = {}

    def _render(self, data: Any) -> Any:
        masked = mask_sensitive(data)
        return truncate_content(masked) if self.truncate else masked

    def _bound(self) -> 'LoguruLogger':
        return self._custom_logger.bind(**self.extra).opt(depth=self.depth)

    def _on_enter(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        enter_call()
        self.extra[ExtraField.CHAIN_START_TIME] = get_chain_start_time()
        if settings.DEBUG:
            self._bound().debug(f'args: {self._render(args)}, kwargs: {self._render(kwargs)}')

    def _on_return(self, value: Any) -> None:
        if settings.DEBUG:
            self._bound().debug(f'return: {self._render(value)}')

    def _on_error(self, exc: Exception) -> None:
        # Nested decorated calls see the same exception; log it where it was raised
        if getattr(exc, '_has_logged', False):
            return
        try:
            exc._has_logged = True  # type: ignore[attr-defined]
        except AttributeError:
            pass
        if isinstance(exc, CustomBaseError):
            self._bound().error(f'{type(exc).__name__}: {exc}')
        else:
            self._bound().exception(f'{type(exc).__name__}: {exc}')

    def __call__(self, func: _F) -> _F:
        self.extra[ExtraField.CALL_TARGET] = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                self._on_enter(args, kwargs)
                try:
                    value = await cast(Awaitable[Any], func(*args, **kwargs))
                except Exception as e:
                    self._on_error(e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    reset_call_depth()
                self._on_return(value)
                return value

            return cast(_F, async_wrapper)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            self._on_enter(args, kwargs)
            try:
                value = func(*args, **kwargs)
            except Exception as e:
                self._on_error(e)
                if self.reraise:
                    raise
                return None
            finally:
                reset_call_depth()
            self._on_return(value)
            return value

        return cast(_F, sync_wrapper)


_P = ParamSpec('_P')
_T = TypeVar('_T')


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(custom_logger=custom_logger, reraise=reraise, truncate=truncate)
        if func:
            return decorator(func)
        return decorator
