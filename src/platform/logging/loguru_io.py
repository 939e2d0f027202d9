"""
`Logger.io`: call tracing for use cases, controllers and loaders

Every decorated call logs its (masked) arguments and return value at DEBUG,
indented by call depth so a request reads as a tree:

    reserve_spots args: ...
    │reserve  args: ...
    │return: ReservationResult(...)

Expected failures (CustomBaseError) are logged once as errors without a
traceback; anything else is logged with its traceback. Both are re-raised
unless `reraise=False`.
"""

from collections.abc import Awaitable
from functools import wraps
from inspect import iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload

import attrs


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import (
    ExtraField,
    call_depth_var,
    custom_logger,
)
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    fetch_layer_depth,
    get_chain_start_time,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])

# Argument/return logging is DEBUG only; skip the masking work otherwise
_TRACE_IO = settings.effective_log_level in ('TRACE', 'DEBUG')


class LoguruIO:
    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = False
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.extra: dict[str, Any] = {}
        self.depth = 2  # wrapper + helper frames

    def _bound(self, *, extra_depth: int = 0) -> 'LoguruLogger':
        return self._custom_logger.bind(**self.extra).opt(depth=self.depth + extra_depth)

    def on_enter(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        call_depth_var.set(call_depth_var.get() + 1)
        self.extra[ExtraField.CHAIN_START_TIME] = get_chain_start_time()
        if _TRACE_IO:
            self._bound().debug(
                f'{fetch_layer_depth()}args: {self.render(args)}, kwargs: {self.render(kwargs)}'
            )

    def on_return(self, return_value: Any) -> Any:
        if _TRACE_IO:
            self._bound().debug(f'{fetch_layer_depth()}return: {self.render(return_value)}')
        return return_value

    def on_error(self, e: Exception) -> None:
        # Outer decorated calls see the same exception again; log it once
        if getattr(e, '_has_logged', False):
            return
        e._has_logged = True  # type: ignore[attr-defined]
        bound = self._bound(extra_depth=1)
        if isinstance(e, CustomBaseError):
            bound.error(f'{type(e).__name__}({e.status_code}): {e.message}')
        else:
            bound.exception(f'{type(e).__name__}: {e}')

    def render(self, data: Any) -> Any:
        """Masked (and optionally truncated) form of `data` for a log line."""
        if attrs.has(type(data)):
            # entities and DTOs: log their fields, not their repr
            data = attrs.asdict(data, recurse=False)

        if isinstance(data, dict):
            rendered: Any = {
                key: self.render(should_mask_keyword(key, value)) for key, value in data.items()
            }
        elif isinstance(data, list | tuple):
            rendered = type(data)(self.render(item) for item in data)
        else:
            rendered = mask_sensitive(data)

        return truncate_content(rendered) if self.truncate_content else rendered

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        # loguru drops frames from its own files when it formats a traceback
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._custom_logger.catch).__code__.co_filename
        )
        return func

    def __call__(self, func: _F) -> _F:
        self.extra[ExtraField.CALL_TARGET] = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    self.on_enter(args, kwargs)
                    args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    return self.on_return(await cast(Awaitable[Any], func(*args, **kwargs)))
                except Exception as e:
                    self.on_error(e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    reset_call_depth()

            return cast(_F, self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                self.on_enter(args, kwargs)
                args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                return self.on_return(func(*args, **kwargs))
            except Exception as e:
                self.on_error(e)
                if self.reraise:
                    raise
                return None
            finally:
                reset_call_depth()

        return cast(_F, self._hide_from_traceback(sync_wrapper))


_P = ParamSpec('_P')
_T = TypeVar('_T')


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate_content: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate_content: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(
            custom_logger=custom_logger, reraise=reraise, truncate_content=truncate_content
        )
        return decorator(func) if func else decorator
