"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and converts
uncaught exceptions into :class:`fastapi.HTTPException` responses.
HTTPExceptions raised by the handler are propagated untouched. Bad detection
properties and malformed measurement records become a ``400``; everything else
becomes a ``500`` with the exception message as the response detail.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException

from datasources.exceptions import DataSourceError
from engine.exceptions import ConfigurationError

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_CLIENT_ERRORS = (ConfigurationError, DataSourceError)


def _translate(exc: Exception) -> HTTPException:
    if isinstance(exc, _CLIENT_ERRORS):
        return HTTPException(status_code=400, detail=str(exc))
    log.exception("unhandled error in route")
    return HTTPException(status_code=500, detail=str(exc))


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    Works with both regular and async functions.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise _translate(exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise _translate(exc) from exc

    return cast(F, sync_wrapper)
