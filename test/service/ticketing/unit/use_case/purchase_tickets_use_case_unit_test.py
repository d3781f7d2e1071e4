"""
Unit tests for PurchaseTicketsUseCase

Test Focus:
1. Input validation happens before the lock or the store is touched
2. Store outcomes (success / not found / insufficient / storage failure) pass through
3. Purchases for one event never overlap; other events are never blocked
4. Lock timeout raises PurchaseTimeoutError and writes nothing
5. A purchase that reached the store finishes even if the caller is cancelled
"""

import asyncio
from typing import Dict
from unittest.mock import AsyncMock

import anyio
import pytest

from src.platform.exception.exceptions import StorageError
from src.platform.state.keyed_lock import KeyedLock
from src.service.ticketing.app.command.purchase_tickets_use_case import PurchaseTicketsUseCase
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.ticketing_errors import (
    EventNotFoundError,
    InsufficientCapacityError,
    PurchaseTimeoutError,
    PurchaseValidationError,
)
from test.service.ticketing.fixtures import make_event


class SlowEventCommandRepo(IEventCommandRepo):
    """In-memory counters with a delay inside every purchase to widen race windows"""

    def __init__(self, stock: Dict[int, int], delay: float = 0.01) -> None:
        self.stock = dict(stock)
        self.delay = delay
        self.active: Dict[int, int] = {}
        self.max_active: Dict[int, int] = {}
        self.completed = 0

    async def create_event(self, *, event_entity: EventEntity) -> EventEntity:
        raise NotImplementedError

    async def decrement_tickets_remaining(self, *, event_id: int, quantity: int) -> EventEntity:
        self.active[event_id] = self.active.get(event_id, 0) + 1
        self.max_active[event_id] = max(self.max_active.get(event_id, 0), self.active[event_id])
        try:
            await anyio.sleep(self.delay)
            if event_id not in self.stock:
                raise EventNotFoundError(event_id)
            available = self.stock[event_id]
            if available < quantity:
                raise InsufficientCapacityError(
                    event_id=event_id, requested=quantity, available=available
                )
            self.stock[event_id] = available - quantity
            self.completed += 1
            return make_event(event_id=event_id, tickets_remaining=self.stock[event_id])
        finally:
            self.active[event_id] -= 1


@pytest.mark.unit
class TestPurchaseOutcomes:
    @pytest.fixture
    def event_command_repo(self):
        return AsyncMock(spec=IEventCommandRepo)

    @pytest.fixture
    def purchase_lock(self):
        return KeyedLock()

    @pytest.fixture
    def use_case(self, event_command_repo, purchase_lock):
        return PurchaseTicketsUseCase(
            event_command_repo=event_command_repo, purchase_lock=purchase_lock, lock_timeout=1
        )

    @pytest.mark.asyncio
    async def test_success_returns_updated_event(self, use_case, event_command_repo):
        # Given
        event_command_repo.decrement_tickets_remaining.return_value = make_event(
            event_id=1, tickets_remaining=1
        )

        # When
        result = await use_case.purchase(event_id=1, quantity=2)

        # Then
        assert result.tickets_remaining == 1
        event_command_repo.decrement_tickets_remaining.assert_awaited_once_with(
            event_id=1, quantity=2
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize('quantity', [0, -1])
    async def test_invalid_quantity_never_reaches_store(
        self, use_case, event_command_repo, purchase_lock, quantity
    ):
        with pytest.raises(PurchaseValidationError) as exc_info:
            await use_case.purchase(event_id=1, quantity=quantity)

        assert exc_info.value.status_code == 400
        event_command_repo.decrement_tickets_remaining.assert_not_awaited()
        assert len(purchase_lock) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'error',
        [
            EventNotFoundError(99),
            InsufficientCapacityError(event_id=1, requested=5, available=2),
            StorageError('Purchase for event 1 could not be committed'),
        ],
    )
    async def test_store_errors_propagate_and_release_lock(
        self, use_case, event_command_repo, purchase_lock, error
    ):
        event_command_repo.decrement_tickets_remaining.side_effect = error

        with pytest.raises(type(error)) as exc_info:
            await use_case.purchase(event_id=1, quantity=5)

        assert exc_info.value is error
        assert len(purchase_lock) == 0

    @pytest.mark.asyncio
    async def test_store_timeout_is_not_reported_as_busy_event(
        self, use_case, event_command_repo, purchase_lock
    ):
        # Given: the lock is free, the store itself times out
        store_timeout = TimeoutError('database is locked')
        event_command_repo.decrement_tickets_remaining.side_effect = store_timeout

        # When
        with pytest.raises(TimeoutError) as exc_info:
            await use_case.purchase(event_id=1, quantity=1)

        # Then
        assert exc_info.value is store_timeout
        assert not isinstance(exc_info.value, PurchaseTimeoutError)
        assert len(purchase_lock) == 0

    def test_error_status_codes(self):
        assert EventNotFoundError(1).status_code == 404
        assert InsufficientCapacityError(event_id=1, requested=2, available=1).status_code == 409
        assert StorageError().status_code == 500
        assert PurchaseTimeoutError(1, 5).status_code == 503


@pytest.mark.unit
class TestPurchaseConcurrency:
    @pytest.fixture
    def purchase_lock(self):
        return KeyedLock()

    @pytest.mark.asyncio
    async def test_same_event_purchases_are_serialized_without_oversell(self, purchase_lock):
        # Given: 3 tickets and 5 concurrent buyers of 1 ticket
        repo = SlowEventCommandRepo({1: 3})
        use_case = PurchaseTicketsUseCase(
            event_command_repo=repo, purchase_lock=purchase_lock, lock_timeout=5
        )

        # When
        results = await asyncio.gather(
            *(use_case.purchase(event_id=1, quantity=1) for _ in range(5)),
            return_exceptions=True,
        )

        # Then: exactly 3 succeed, the rest see insufficient capacity
        successes = [r for r in results if isinstance(r, EventEntity)]
        failures = [r for r in results if isinstance(r, InsufficientCapacityError)]
        assert len(successes) == 3
        assert len(failures) == 2
        assert sorted(r.tickets_remaining for r in successes) == [0, 1, 2]
        assert all(f.available == 0 for f in failures)
        assert repo.stock[1] == 0
        assert repo.max_active[1] == 1
        assert len(purchase_lock) == 0

    @pytest.mark.asyncio
    async def test_different_events_run_concurrently(self, purchase_lock):
        repo = SlowEventCommandRepo({1: 10, 2: 10}, delay=0.05)
        use_case = PurchaseTicketsUseCase(
            event_command_repo=repo, purchase_lock=purchase_lock, lock_timeout=5
        )

        await asyncio.gather(
            use_case.purchase(event_id=1, quantity=1),
            use_case.purchase(event_id=2, quantity=1),
        )

        assert repo.stock == {1: 9, 2: 9}
        assert repo.max_active == {1: 1, 2: 1}

    @pytest.mark.asyncio
    async def test_held_event_does_not_block_other_event(self, purchase_lock):
        repo = SlowEventCommandRepo({1: 5, 2: 5})
        use_case = PurchaseTicketsUseCase(
            event_command_repo=repo, purchase_lock=purchase_lock, lock_timeout=0.5
        )
        held = anyio.Event()
        release = anyio.Event()

        async def hold_event_one() -> None:
            async with purchase_lock.hold(1):
                held.set()
                await release.wait()

        async with anyio.create_task_group() as tg:
            tg.start_soon(hold_event_one)
            await held.wait()

            result = await use_case.purchase(event_id=2, quantity=2)

            assert result.tickets_remaining == 3
            assert purchase_lock.locked(1)
            release.set()

        assert repo.stock[1] == 5

    @pytest.mark.asyncio
    async def test_lock_timeout_writes_nothing(self, purchase_lock):
        # Given: another purchase of event 1 holds its lock
        repo = SlowEventCommandRepo({1: 5})
        use_case = PurchaseTicketsUseCase(
            event_command_repo=repo, purchase_lock=purchase_lock, lock_timeout=0.05
        )
        held = anyio.Event()
        release = anyio.Event()

        async def hold_event_one() -> None:
            async with purchase_lock.hold(1):
                held.set()
                await release.wait()

        async with anyio.create_task_group() as tg:
            tg.start_soon(hold_event_one)
            await held.wait()

            # When
            with pytest.raises(PurchaseTimeoutError) as exc_info:
                await use_case.purchase(event_id=1, quantity=1)
            release.set()

        # Then
        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.__cause__, TimeoutError)
        assert repo.stock[1] == 5
        assert repo.completed == 0
        assert len(purchase_lock) == 0

    @pytest.mark.asyncio
    async def test_started_purchase_completes_when_caller_is_cancelled(self, purchase_lock):
        # Given: the store takes longer than the caller is willing to wait
        repo = SlowEventCommandRepo({1: 3}, delay=0.05)
        use_case = PurchaseTicketsUseCase(
            event_command_repo=repo, purchase_lock=purchase_lock, lock_timeout=5
        )

        # When
        with anyio.move_on_after(0.01):
            await use_case.purchase(event_id=1, quantity=1)

        # Then: the write was finished, not abandoned half way
        assert repo.completed == 1
        assert repo.stock[1] == 2
        assert len(purchase_lock) == 0

    @pytest.mark.asyncio
    async def test_cancelled_while_waiting_for_lock_writes_nothing(self, purchase_lock):
        repo = SlowEventCommandRepo({1: 3})
        use_case = PurchaseTicketsUseCase(
            event_command_repo=repo, purchase_lock=purchase_lock, lock_timeout=5
        )
        held = anyio.Event()
        release = anyio.Event()

        async def hold_event_one() -> None:
            async with purchase_lock.hold(1):
                held.set()
                await release.wait()

        async with anyio.create_task_group() as tg:
            tg.start_soon(hold_event_one)
            await held.wait()

            with anyio.move_on_after(0.02) as scope:
                await use_case.purchase(event_id=1, quantity=1)
            release.set()

        assert scope.cancelled_caught
        assert repo.completed == 0
        assert repo.stock[1] == 3
        assert len(purchase_lock) == 0
