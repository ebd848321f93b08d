"""
FastAPI router for the send endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from mailer.send.dispatcher import Dispatcher
from mailer.send.schemas import ErrorResponse, SendRequest, SendResponse

router = APIRouter(tags=["send"])


def get_dispatcher(request: Request) -> Dispatcher:
    """Dependency returning the dispatcher built at startup."""
    return request.app.state.dispatcher


@router.post(
    "/send",
    response_model=SendResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed or invalid request"},
        500: {"model": ErrorResponse, "description": "Provider failure"},
    },
)
async def send(
    payload: SendRequest,
    dispatcher: Annotated[Dispatcher, Depends(get_dispatcher)],
) -> SendResponse:
    """Send one email through the requested provider."""
    message_id = await dispatcher.dispatch(payload)
    return SendResponse(message_id=message_id)
