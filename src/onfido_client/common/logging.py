"""
Logging utilities for onfido_client.

The library never configures handlers; applications do. These helpers only
attach structured context (via ``extra``) so a JSON formatter downstream can
pick the fields up.
"""

import asyncio
import functools
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from onfido_client.common.security import sanitize_error_message

F = TypeVar("F", bound=Callable[..., Any])

# Instance attributes copied into log context by LoggedClass
_CONTEXT_ATTRS = ("base_url", "collection_path")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    msg: str,
    **kwargs: Any,
) -> None:
    """
    Log with structured context fields.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        msg: Log message
        **kwargs: Additional context fields (api_method, http_status, etc.)

    Example:
        log_with_context(
            logger, logging.DEBUG, "API request completed",
            api_method="GET",
            http_status=200,
            duration_ms=elapsed,
        )
    """
    logger.log(level, msg, extra=kwargs)


def log_exception(
    logger: logging.Logger,
    exc: BaseException,
    msg: str,
    level: int = logging.ERROR,
    include_traceback: bool = True,
    **kwargs: Any,
) -> None:
    """
    Log exception with context and optional traceback.

    Extracts error_category (and http_status for API errors) from the
    exception when available. The error message is sanitized and truncated.

    Args:
        logger: Logger instance
        exc: Exception to log
        msg: Context message
        level: Log level (default: ERROR)
        include_traceback: Include full traceback (default: True)
        **kwargs: Additional context fields
    """
    if kwargs.get("error_category") is None and hasattr(exc, "category"):
        cat = exc.category
        kwargs["error_category"] = cat.value if hasattr(cat, "value") else str(cat)

    status_code = getattr(exc, "status_code", None)
    if status_code is not None:
        kwargs.setdefault("http_status", status_code)

    kwargs["error_message"] = sanitize_error_message(str(exc))

    if include_traceback:
        logger.log(level, msg, exc_info=exc, extra=kwargs)
    else:
        logger.log(level, msg, extra=kwargs)


def _extract_instance_context(obj: Any) -> Dict[str, Any]:
    """Collect identifying attributes from an instance for log context."""
    ctx: Dict[str, Any] = {}
    for attr in _CONTEXT_ATTRS:
        value = getattr(obj, attr, None)
        if value is not None:
            ctx[attr] = value
    return ctx


def logged_operation(
    level: int = logging.DEBUG,
    log_start: bool = False,
    operation_name: Optional[str] = None,
) -> Callable[[F], F]:
    """
    Decorator for automatic operation logging on class methods.

    Logs completion at ``level`` and failures at ERROR (without traceback,
    the exception is re-raised to the caller unchanged).

    Args:
        level: Log level for start/completion messages
        log_start: Also log when operation starts
        operation_name: Override operation name (default: method name)

    Example:
        class OnfidoApiClient(LoggedClass):
            @logged_operation(level=logging.DEBUG)
            async def get_check(self, check_id):
                ...
    """

    def decorator(func: F) -> F:
        def _context(self: Any) -> tuple:
            _logger = getattr(self, "_logger", None) or get_logger(
                self.__class__.__module__
            )
            op_name = operation_name or func.__name__
            return _logger, f"{self.__class__.__name__}.{op_name}"

        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(self, *args, **kwargs):
                _logger, full_op = _context(self)
                if log_start:
                    log_with_context(_logger, level, f"{full_op} starting")
                try:
                    result = await func(self, *args, **kwargs)
                except Exception as e:
                    log_exception(
                        _logger, e, f"{full_op} failed", include_traceback=False
                    )
                    raise
                log_with_context(_logger, level, f"{full_op} completed")
                return result

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def sync_wrapper(self, *args, **kwargs):
            _logger, full_op = _context(self)
            if log_start:
                log_with_context(_logger, level, f"{full_op} starting")
            try:
                result = func(self, *args, **kwargs)
            except Exception as e:
                log_exception(_logger, e, f"{full_op} failed", include_traceback=False)
                raise
            log_with_context(_logger, level, f"{full_op} completed")
            return result

        return sync_wrapper  # type: ignore

    return decorator


class LoggedClass:
    """
    Mixin providing logging infrastructure for classes.

    Provides:
    - self._logger: Logger instance
    - self._log(): Log with auto-extracted context
    - self._log_exception(): Exception logging with context

    Example:
        class Transport(LoggedClass):
            log_component = "transport"

            def __init__(self, base_url: str):
                self.base_url = base_url
                super().__init__()
    """

    log_component: Optional[str] = None  # Optional logger name suffix

    def __init__(self, *args, **kwargs):
        logger_name = self.__class__.__module__
        if self.log_component:
            logger_name = f"{logger_name}.{self.log_component}"
        self._logger = get_logger(logger_name)
        super().__init__(*args, **kwargs)

    def _log(self, level: int, msg: str, **extra: Any) -> None:
        """
        Log with automatic context extraction from instance.

        Args:
            level: Log level
            msg: Log message
            **extra: Additional context fields
        """
        context = _extract_instance_context(self)
        context.update(extra)
        log_with_context(self._logger, level, msg, **context)

    def _log_exception(
        self,
        exc: BaseException,
        msg: str,
        level: int = logging.ERROR,
        **extra: Any,
    ) -> None:
        """
        Log exception with automatic context extraction from instance.

        Args:
            exc: Exception to log
            msg: Context message
            level: Log level (default: ERROR)
            **extra: Additional context fields
        """
        context = _extract_instance_context(self)
        context.update(extra)
        log_exception(self._logger, exc, msg, level=level, **context)
