"""
Purchase Tickets Use Case

The only path that lowers an event's remaining tickets.

Per event id the purchase is serialized twice:
1. in-process: KeyedLock holds one anyio.Lock per event id across the transaction
2. in the store: the repo's conditional UPDATE never writes a negative counter

Different event ids never wait on each other.
"""

from typing import Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.state.keyed_lock import KeyedLock
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.ticketing_errors import PurchaseTimeoutError


class PurchaseTicketsUseCase:
    def __init__(
        self,
        event_command_repo: IEventCommandRepo,
        purchase_lock: KeyedLock,
        lock_timeout: float = settings.PURCHASE_LOCK_TIMEOUT_SECONDS,
    ) -> None:
        self.event_command_repo = event_command_repo
        self.purchase_lock = purchase_lock
        self.lock_timeout = lock_timeout

    @classmethod
    @inject
    def depends(
        cls,
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
        purchase_lock: KeyedLock = Depends(Provide[Container.purchase_lock]),
    ) -> Self:
        return cls(event_command_repo=event_command_repo, purchase_lock=purchase_lock)

    @Logger.io
    async def purchase(self, *, event_id: int, quantity: int) -> EventEntity:
        """
        Buy `quantity` tickets for `event_id`.

        Returns:
            The event with its remaining tickets after this purchase

        Raises:
            PurchaseValidationError: event_id or quantity is not a positive integer
            EventNotFoundError: no such event
            InsufficientCapacityError: fewer than `quantity` tickets remain
            PurchaseTimeoutError: the event's lock was not free within lock_timeout
            StorageError: the store failed, nothing was written
        """
        EventEntity.validate_purchase(event_id=event_id, quantity=quantity)
        Logger.base.info(f'🛒 [PURCHASE] Event {event_id}: requesting {quantity} ticket(s)')

        lock_acquired = False
        try:
            async with self.purchase_lock.hold(event_id, timeout=self.lock_timeout):
                lock_acquired = True
                # A started transaction always reaches commit or rollback,
                # even when the caller is cancelled meanwhile
                with anyio.CancelScope(shield=True):
                    updated_event = await self.event_command_repo.decrement_tickets_remaining(
                        event_id=event_id, quantity=quantity
                    )
        except TimeoutError as e:
            # Only a timeout while waiting for the lock is a busy event
            if lock_acquired:
                raise
            raise PurchaseTimeoutError(event_id, self.lock_timeout) from e

        Logger.base.info(
            f'✅ [PURCHASE] Event {event_id}: sold {quantity}, '
            f'{updated_event.tickets_remaining} remaining'
        )
        return updated_event
