"""Voice platform request envelope (Alexa custom skill JSON).

Only the fields the skill reads are modelled; everything else is ignored.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AlexaModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class User(AlexaModel):
    user_id: str


class Session(AlexaModel):
    new: bool = False
    session_id: str
    user: User


class Slot(AlexaModel):
    name: str
    value: str | None = None


class Intent(AlexaModel):
    name: str
    slots: dict[str, Slot] = Field(default_factory=dict)


class LaunchRequest(AlexaModel):
    type: Literal["LaunchRequest"]
    request_id: str
    locale: str | None = None


class IntentRequest(AlexaModel):
    type: Literal["IntentRequest"]
    request_id: str
    intent: Intent
    locale: str | None = None


class SessionEndedRequest(AlexaModel):
    type: Literal["SessionEndedRequest"]
    request_id: str
    reason: str | None = None


class AlexaRequest(AlexaModel):
    version: str
    session: Session
    request: Annotated[
        LaunchRequest | IntentRequest | SessionEndedRequest,
        Field(discriminator="type"),
    ]


def speech_response(
    text: str, end_session: bool, reprompt: str | None = None
) -> dict:
    """Build a PlainText speech response envelope."""
    response: dict = {
        "outputSpeech": {"type": "PlainText", "text": text},
        "shouldEndSession": end_session,
    }
    if reprompt is not None:
        response["reprompt"] = {"outputSpeech": {"type": "PlainText", "text": reprompt}}
    return {"version": "1.0", "response": response}
