from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.purchase_tickets_use_case import PurchaseTicketsUseCase
from src.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from src.service.ticketing.app.query.list_events_use_case import ListEventsUseCase
from src.service.ticketing.driving_adapter.schema.event_schema import (
    EventResponse,
    PurchaseRequest,
)


router = APIRouter()


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_events()
    return [EventResponse.from_entity(event) for event in events]


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    event = await use_case.get_by_id(event_id=event_id)
    return EventResponse.from_entity(event)


@router.post('/{event_id}/purchase', status_code=status.HTTP_200_OK)
@Logger.io
async def purchase_tickets(
    event_id: int,
    request: PurchaseRequest,
    use_case: PurchaseTicketsUseCase = Depends(PurchaseTicketsUseCase.depends),
) -> EventResponse:
    updated_event = await use_case.purchase(event_id=event_id, quantity=request.quantity)
    return EventResponse.from_entity(updated_event)
