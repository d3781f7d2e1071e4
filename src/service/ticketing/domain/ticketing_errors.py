"""
Ticketing domain errors

Every purchase outcome other than success is one of these. They all derive from
CustomBaseError, so the HTTP layer maps them by status code and @Logger.io logs
them without a traceback.
"""

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    ServiceUnavailableError,
)


class PurchaseValidationError(DomainError):
    pass


class EventNotFoundError(NotFoundError):
    def __init__(self, event_id: int) -> None:
        self.event_id = event_id
        super().__init__(f'Event {event_id} not found')


class InsufficientCapacityError(ConflictError):
    def __init__(self, *, event_id: int, requested: int, available: int) -> None:
        self.event_id = event_id
        self.requested = requested
        self.available = available
        super().__init__(
            f'Not enough tickets available: requested {requested}, only {available} left'
        )


class PurchaseTimeoutError(ServiceUnavailableError):
    def __init__(self, event_id: int, timeout: float) -> None:
        self.event_id = event_id
        self.timeout = timeout
        super().__init__(f'Event {event_id} is busy, purchase timed out after {timeout:g}s')
