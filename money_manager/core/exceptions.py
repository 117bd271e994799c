# money_manager/core/exceptions.py
from fastapi import status


class MoneyManagerError(Exception):
    """Base class for errors that map onto a client-facing HTTP outcome."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(MoneyManagerError):
    # Also used when the record exists but belongs to another user
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(MoneyManagerError):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(MoneyManagerError):
    status_code = status.HTTP_409_CONFLICT


class EditWindowClosedError(ForbiddenError):
    def __init__(self, action: str = "edited"):
        super().__init__(f"Transaction cannot be {action} after 12 hours")
        self.action = action


class DefaultCategoryError(ForbiddenError):
    def __init__(self):
        super().__init__("Default categories cannot be deleted")
