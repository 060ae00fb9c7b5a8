"""
Result values returned by the service layer.

Mutating service methods never raise into the views. They return either
``Ok(value)`` or ``Err(kind, message)``, and callers branch on the type::

    result = TermService().create(term)
    if isinstance(result, Ok):
        ...
    else:
        messages.error(request, result.message)

``service_boundary`` wraps a service method so that anything the method did
not turn into an ``Err`` itself (validation errors raised by ``full_clean``,
database failures) is converted and logged on the way out.
"""

import enum
import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from django.core.exceptions import ValidationError
from django.db import DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORAGE_ERROR_MESSAGE = "Unable to save changes. Please try again."
UNEXPECTED_ERROR_MESSAGE = "The operation could not be completed. Please try again."


class ErrorKind(enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    NOT_INITIALIZED = "not_initialized"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T = None

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    # Underlying exception text, kept for logs and admins only.
    detail: str = field(default="", compare=False)

    @property
    def is_ok(self) -> bool:
        return False

    def user_message(self, show_detail: bool = False) -> str:
        if show_detail and self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


Result = Union[Ok, Err]


def validation_message(exc: ValidationError) -> str:
    """Flatten a Django ValidationError into a single human readable string."""
    if hasattr(exc, "message_dict"):
        parts = []
        for field_name, errors in exc.message_dict.items():
            for error in errors:
                if field_name == "__all__":
                    parts.append(error)
                else:
                    parts.append(f"{field_name.replace('_', ' ').capitalize()}: {error}")
        return " ".join(parts)
    return " ".join(exc.messages)


def service_boundary(operation: str):
    """
    Decorator for service methods returning a ``Result``.

    Converts ``ValidationError`` into ``Err(VALIDATION)`` and
    ``DatabaseError`` into ``Err(STORAGE)``. Any other exception is logged
    with its traceback and returned as ``Err(STORAGE)`` with a generic
    message. Nothing is retried.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Result:
            try:
                return func(*args, **kwargs)
            except ValidationError as exc:
                message = validation_message(exc)
                logger.info("%s rejected: %s", operation, message)
                return Err(ErrorKind.VALIDATION, message)
            except DatabaseError as exc:
                logger.exception("%s failed in the database", operation)
                return Err(ErrorKind.STORAGE, STORAGE_ERROR_MESSAGE, detail=str(exc))
            except Exception as exc:
                logger.exception("%s failed unexpectedly", operation)
                return Err(ErrorKind.STORAGE, UNEXPECTED_ERROR_MESSAGE, detail=str(exc))

        return wrapper

    return decorator


def unexpected_error_message(exc: Exception, show_detail: bool = False) -> str:
    """Text shown to the operator when a call failed outside the Result channel."""
    if show_detail:
        return f"An error occurred: {exc}"
    return "An error occurred. Please try again."
