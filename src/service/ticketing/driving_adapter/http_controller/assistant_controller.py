from typing import Any

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.booking_assistant_use_case import BookingAssistantUseCase
from src.service.ticketing.app.query.parse_booking_request_use_case import (
    ParseBookingRequestUseCase,
)
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driving_adapter.http_controller.user_controller import (
    get_current_user,
)
from src.service.ticketing.driving_adapter.schema.assistant_schema import (
    AssistantMessageRequest,
    AssistantMessageResponse,
)


router = APIRouter()


@router.post('/llm/parse', status_code=status.HTTP_200_OK)
@Logger.io
async def parse_booking_request(
    request: AssistantMessageRequest,
    use_case: ParseBookingRequestUseCase = Depends(ParseBookingRequestUseCase.depends),
) -> dict[str, Any]:
    """Stateless parse: `{"event": {...}}` or `{"error": {"msg": ...}}`"""
    intent = await use_case.parse(message=request.message)
    return intent.to_dict()


@router.post('/assistant/messages', status_code=status.HTTP_200_OK)
@Logger.io
async def send_assistant_message(
    request: AssistantMessageRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: BookingAssistantUseCase = Depends(BookingAssistantUseCase.depends),
) -> AssistantMessageResponse:
    assistant_reply = await use_case.handle_message(
        session_key=str(current_user.id), message=request.message
    )
    return AssistantMessageResponse.from_reply(assistant_reply)
