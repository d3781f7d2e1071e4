"""
Unit tests for EventEntity

Test Focus:
1. create() validates name, location, capacity and the event date
2. starts_at is always stored as aware UTC
3. validate_purchase() rejects anything but positive integers
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.ticketing.domain.entity.event_entity import MAX_STORED_INTEGER, EventEntity
from src.service.ticketing.domain.ticketing_errors import PurchaseValidationError


NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.unit
class TestEventEntityCreate:
    def test_create_strips_text_and_keeps_capacity_as_remaining(self):
        # When
        event = EventEntity.create(
            name='  Spring Concert ',
            starts_at=NOW + timedelta(days=1),
            location=' Littlejohn Coliseum ',
            capacity=250,
            now=NOW,
        )

        # Then
        assert event.name == 'Spring Concert'
        assert event.location == 'Littlejohn Coliseum'
        assert event.tickets_remaining == 250
        assert event.id is None

    def test_create_allows_zero_capacity(self):
        event = EventEntity.create(
            name='Sold Out Show',
            starts_at=NOW + timedelta(hours=1),
            location='Tillman Hall',
            capacity=0,
            now=NOW,
        )

        assert event.tickets_remaining == 0

    @pytest.mark.parametrize(
        'field, value, message',
        [
            ('name', '   ', 'Event name cannot be empty'),
            ('location', '', 'Event location cannot be empty'),
            ('capacity', -1, 'Event capacity cannot be negative'),
            ('capacity', 2.5, 'Event capacity must be an integer'),
            ('capacity', True, 'Event capacity must be an integer'),
            ('capacity', MAX_STORED_INTEGER + 1, 'Event capacity is too large'),
        ],
    )
    def test_create_rejects_invalid_fields(self, field, value, message):
        kwargs = {
            'name': 'Homecoming Game',
            'starts_at': NOW + timedelta(days=1),
            'location': 'Memorial Stadium',
            'capacity': 10,
        }
        kwargs[field] = value

        with pytest.raises(DomainError) as exc_info:
            EventEntity.create(**kwargs, now=NOW)

        assert exc_info.value.message == message
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize('offset', [timedelta(0), timedelta(days=-1)])
    def test_create_rejects_events_not_in_the_future(self, offset):
        with pytest.raises(DomainError, match='must be in the future'):
            EventEntity.create(
                name='Past Event',
                starts_at=NOW + offset,
                location='Cooper Library',
                capacity=5,
                now=NOW,
            )


@pytest.mark.unit
class TestEventEntityDatetime:
    def test_naive_datetime_is_treated_as_utc(self):
        event = EventEntity(
            name='Career Fair',
            starts_at=datetime(2030, 3, 1, 9, 0),
            location='Hendrix Center',
            tickets_remaining=1,
        )

        assert event.starts_at.tzinfo == timezone.utc
        assert event.starts_at.hour == 9

    def test_aware_datetime_is_converted_to_utc(self):
        eastern = timezone(timedelta(hours=-5))
        event = EventEntity(
            name='Career Fair',
            starts_at=datetime(2030, 3, 1, 9, 0, tzinfo=eastern),
            location='Hendrix Center',
            tickets_remaining=1,
        )

        assert event.starts_at == datetime(2030, 3, 1, 14, 0, tzinfo=timezone.utc)

    def test_non_datetime_is_rejected(self):
        with pytest.raises(DomainError, match='valid datetime'):
            EventEntity(
                name='Career Fair',
                starts_at='tomorrow',  # type: ignore[arg-type]
                location='Hendrix Center',
                tickets_remaining=1,
            )


@pytest.mark.unit
class TestValidatePurchase:
    def test_positive_integers_pass(self):
        EventEntity.validate_purchase(event_id=1, quantity=1)

    @pytest.mark.parametrize('quantity', [0, -3, 1.5, '2', None, True])
    def test_invalid_quantity(self, quantity):
        with pytest.raises(PurchaseValidationError, match='Quantity must be a positive integer'):
            EventEntity.validate_purchase(event_id=1, quantity=quantity)

    @pytest.mark.parametrize('event_id', [0, -1, 'abc', None])
    def test_invalid_event_id(self, event_id):
        with pytest.raises(PurchaseValidationError, match='Event id must be a positive integer'):
            EventEntity.validate_purchase(event_id=event_id, quantity=1)
