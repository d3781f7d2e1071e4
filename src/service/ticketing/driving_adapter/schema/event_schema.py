from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from src.service.ticketing.domain.entity.event_entity import EventEntity


class EventCreateRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'name': 'Clemson vs. South Carolina',
                'datetime': '2030-11-29T19:30:00-05:00',
                'location': 'Memorial Stadium',
                'capacity': 500,
            }
        },
    )

    name: str = Field(..., min_length=1, max_length=255)
    starts_at: datetime = Field(..., alias='datetime')
    location: str = Field(..., min_length=1, max_length=255)
    capacity: StrictInt = Field(..., ge=0)


class PurchaseRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={'example': {'quantity': 2}})

    # Range checked in the use case so that 0 maps to the domain validation error
    quantity: StrictInt


class EventResponse(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'id': 1,
                'name': 'Clemson vs. South Carolina',
                'datetime': '2030-11-30T00:30:00Z',
                'location': 'Memorial Stadium',
                'capacity': 498,
            }
        },
    )

    id: int
    name: str
    starts_at: datetime = Field(..., alias='datetime')
    location: str
    capacity: int

    @classmethod
    def from_entity(cls, event: EventEntity) -> 'EventResponse':
        return cls(
            id=event.id or 0,
            name=event.name,
            starts_at=event.starts_at,
            location=event.location,
            capacity=event.tickets_remaining,
        )
