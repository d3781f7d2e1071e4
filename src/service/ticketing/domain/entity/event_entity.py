from datetime import datetime, timezone
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.ticketing.domain.ticketing_errors import PurchaseValidationError


# Largest value a SQLite INTEGER column can hold
MAX_STORED_INTEGER = 2**63 - 1


def _to_utc(value: datetime) -> datetime:
    if not isinstance(value, datetime):
        raise DomainError('Event datetime must be a valid datetime')
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise DomainError(f'Event {attribute.name} cannot be empty')


def _validate_tickets_remaining(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainError('Event capacity must be an integer')
    if value < 0:
        raise DomainError('Event capacity cannot be negative')
    if value > MAX_STORED_INTEGER:
        raise DomainError('Event capacity is too large')


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


@attrs.define
class EventEntity:
    """
    A campus event and its ticket counter.

    `tickets_remaining` is what the API calls `capacity`: tickets still for sale.
    It is set once at creation and afterwards only lowered by purchases.
    """

    name: str = attrs.field(validator=_validate_non_empty_string)
    starts_at: datetime = attrs.field(converter=_to_utc)
    location: str = attrs.field(validator=_validate_non_empty_string)
    tickets_remaining: int = attrs.field(validator=_validate_tickets_remaining)
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        name: str,
        starts_at: datetime,
        location: str,
        capacity: int,
        now: Optional[datetime] = None,
    ) -> 'EventEntity':
        event = cls(
            name=name.strip() if isinstance(name, str) else name,
            starts_at=starts_at,
            location=location.strip() if isinstance(location, str) else location,
            tickets_remaining=capacity,
        )
        if event.starts_at <= (now or datetime.now(timezone.utc)):
            raise DomainError('Event datetime must be in the future')
        return event

    @staticmethod
    def validate_purchase(*, event_id: Any, quantity: Any) -> None:
        if not _is_positive_int(event_id):
            raise PurchaseValidationError('Event id must be a positive integer')
        if not _is_positive_int(quantity):
            raise PurchaseValidationError('Quantity must be a positive integer')
