from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.create_event_use_case import CreateEventUseCase
from src.service.ticketing.driving_adapter.schema.event_schema import (
    EventCreateRequest,
    EventResponse,
)


router = APIRouter()


@router.post('/events', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.create_event(
        name=request.name,
        starts_at=request.starts_at,
        location=request.location,
        capacity=request.capacity,
    )
    return EventResponse.from_entity(event)
