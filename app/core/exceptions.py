"""
Domain error taxonomy and the service-boundary guard
"""

import functools
import logging
from typing import Any, Dict, List, Optional

from app.config import settings

logger = logging.getLogger(__name__)


class FinanceError(Exception):
    """Base class for errors that are reported to the client as-is"""

    status_code: int = 500

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationFailed(FinanceError):
    status_code = 400


class Unauthorized(FinanceError):
    status_code = 401


class Forbidden(FinanceError):
    status_code = 403


class NotFound(FinanceError):
    status_code = 404


class Conflict(FinanceError):
    status_code = 409


class ServiceFailure(FinanceError):
    status_code = 500


def guard_service(message: str):
    """
    Wrap a service coroutine so that only FinanceError subclasses escape.

    Anything else is logged (outside production) and replaced by a
    ServiceFailure carrying the generic message.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except FinanceError:
                raise
            except Exception as e:
                if not settings.is_production:
                    logger.exception("Error in %s: %s", func.__qualname__, e)
                raise ServiceFailure(message) from e
        return wrapper
    return decorator
