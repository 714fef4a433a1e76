import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession


class AppError(Exception):
    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class UnauthorizedError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


class StorageError(AppError):
    status_code = 500
    code = "STORAGE_ERROR"


async def commit_or_raise(session: AsyncSession, action: str) -> None:
    """
    Commits the session, rolling back and translating driver errors:
    IntegrityError -> ConflictError, anything else from SQLAlchemy -> StorageError.
    """
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        logging.warning(f"Conflict while trying to {action}: {e.orig}")
        raise ConflictError(f"Could not {action}: duplicate or conflicting record") from e
    except SQLAlchemyError as e:
        await session.rollback()
        logging.error(f"Storage failure while trying to {action}: {e}", exc_info=True)
        raise StorageError(f"Could not {action}: storage unavailable") from e
