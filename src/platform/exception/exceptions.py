from typing import Any


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    kind = 'Error'

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def extra(self) -> dict[str, Any]:
        """Structured fields added to the error response body"""
        return {}


class DomainError(CustomBaseError):
    kind = 'DomainError'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InvalidStateError(DomainError):
    kind = 'InvalidState'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    kind = 'Forbidden'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    kind = 'NotFound'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    kind = 'Conflict'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class SeatUnavailableError(ConflictError):
    kind = 'SeatUnavailable'

    def __init__(self, unavailable_seats: list[str], message: str | None = None) -> None:
        self.unavailable_seats = list(unavailable_seats)
        super().__init__(
            message or f'Seats already taken: {", ".join(self.unavailable_seats)}'
        )

    @property
    def extra(self) -> dict[str, Any]:
        return {'unavailable_seats': self.unavailable_seats}


class InsufficientInventoryError(ConflictError):
    kind = 'InsufficientInventory'

    def __init__(self, message: str, *, requested: int = 0, available: int = 0) -> None:
        self.requested = requested
        self.available = available
        super().__init__(message)

    @property
    def extra(self) -> dict[str, Any]:
        return {'requested': self.requested, 'available': self.available}


class NoInventoryError(InsufficientInventoryError):
    kind = 'NoInventory'


class PerformanceSoldOutError(InvalidStateError, InsufficientInventoryError):
    """A sold-out performance is both an invalid purchase target and an inventory shortfall"""

    kind = 'InvalidState'

    def __init__(self, message: str, *, requested: int = 0) -> None:
        self.requested = requested
        self.available = 0
        CustomBaseError.__init__(self, message, 409)


class ConflictRetryableError(ConflictError):
    kind = 'ConflictRetryable'


class AuthenticationError(CustomBaseError):
    kind = 'Unauthorized'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)
