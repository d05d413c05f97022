"""Voice platform webhook route."""

import logging

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from tram_skill.models.alexa import (
    AlexaRequest,
    IntentRequest,
    LaunchRequest,
    SessionEndedRequest,
    speech_response,
)
from tram_skill.services import speech
from tram_skill.services.intent_service import IntentDispatcher, IntentRequestData

logger = logging.getLogger(__name__)


async def handle_alexa_payload(payload: object, dispatcher: IntentDispatcher) -> dict | None:
    """Answer one voice platform request.

    Args:
        payload: Decoded JSON body.
        dispatcher: Intent dispatcher bound to the itinerary engine.

    Returns:
        Response envelope, or None for requests that expect an empty body.
    """
    try:
        alexa_request = AlexaRequest.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Malformed voice request: {e.error_count()} validation errors")
        return speech_response(speech.MALFORMED_REQUEST_TEXT, end_session=True)

    request = alexa_request.request
    if isinstance(request, LaunchRequest):
        return speech_response(
            speech.LAUNCH_PROMPT, end_session=False, reprompt=speech.LAUNCH_PROMPT
        )

    if isinstance(request, IntentRequest):
        intent = IntentRequestData(
            name=request.intent.name,
            caller_id=alexa_request.session.user.user_id,
            slots={name: slot.value for name, slot in request.intent.slots.items()},
        )
        logger.debug(f"Intent {intent.name} with slots {intent.slots}")
        outcome = await dispatcher.handle(intent)
        return speech_response(outcome.text, end_session=outcome.end_session)

    if isinstance(request, SessionEndedRequest):
        logger.debug(f"Session ended: {request.reason}")
    return None


def register_alexa_webhook(mcp: FastMCP, dispatcher: IntentDispatcher, path: str = "/") -> None:
    """Expose the webhook as a POST route of the server's HTTP app."""

    @mcp.custom_route(path, methods=["POST"], name="alexa_webhook")
    async def alexa_webhook(request: Request) -> Response:
        try:
            payload = await request.json()
        except ValueError:
            payload = None

        body = await handle_alexa_payload(payload, dispatcher)
        if body is None:
            return Response(status_code=200)
        return JSONResponse(body)
