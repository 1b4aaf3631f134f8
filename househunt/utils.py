import math
from functools import wraps
from typing import Any, Callable, Tuple, TypeVar, cast

from fastapi import HTTPException, status

F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


# ---- Custom exceptions ----
class ServiceError(Exception):
    """Base class for service errors."""


class ValidationError(ServiceError):
    """Malformed or missing input."""


class PreconditionError(ServiceError):
    """The caller is not yet in a state that allows the operation."""


class ConflictError(ServiceError):
    pass


class AuthenticationError(ServiceError):
    """Bad, missing or expired credential."""


class AuthorizationError(ServiceError):
    """Role or ownership denial."""


class NotFoundError(ServiceError):
    pass


def translate_service_errors(fn: F) -> F:
    """
    Decorator which translates service exceptions into HTTPExceptions while
    preserving the wrapped function's signature so FastAPI/OpenAPI behave correctly.
    """

    @wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await fn(*args, **kwargs)
        except NotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        except ConflictError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
        except AuthenticationError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(e),
                headers={"WWW-Authenticate": "Bearer"},
            )
        except AuthorizationError as e:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
        except ServiceError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return cast(F, wrapper)


class CaseInsensitiveEnum:
    """Mixin for str enums which accept their values in any letter case."""

    @classmethod
    def _missing_(cls, value: object) -> Any:
        if isinstance(value, str):
            for member in cls:  # type: ignore[attr-defined]
                if member.value == value.upper():
                    return member
        return None


# ---- Utilities ----
def clamp_pagination(page: int, page_size: int) -> Tuple[int, int, int]:
    """Return (page, page_size, offset) with page >= 1 and page_size in [1, 100]."""
    page = max(1, page)
    page_size = min(MAX_PAGE_SIZE, max(1, page_size))
    return page, page_size, (page - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)
