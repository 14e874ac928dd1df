import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from concierge.config import Settings
from concierge.dependencies import get_chat_client, get_settings
from concierge.models.chat import ChatRequest, ChatResponse
from concierge.persona import SYSTEM_PROMPT
from concierge.services.openai_chat import OpenAIChatClient

router = APIRouter(prefix="/chat", tags=["chat"])
logger = logging.getLogger(__name__)

NO_CONTENT_REPLY = "Sorry, I couldn’t generate a response."
SNAG_REPLY = "I hit a snag. Tap WhatsApp in the chat widget and I’ll help there!"


@router.post("", response_model=ChatResponse)
async def chat_reply(
    payload: Optional[ChatRequest] = None,
    app_settings: Settings = Depends(get_settings),
    client: OpenAIChatClient = Depends(get_chat_client),
):
    """
    Relay the widget conversation to the LLM with the concierge persona prepended.

    Always answers 200; failures become a friendly reply pointing to WhatsApp.
    """
    history = [message.model_dump(exclude_unset=True) for message in (payload.messages or [])] if payload else []
    messages = [{"role": "system", "content": SYSTEM_PROMPT}, *history]

    if not app_settings.openai_api_key:
        logger.warning("OpenAI API key not configured")
        return ChatResponse(reply=NO_CONTENT_REPLY)

    try:
        content = await client.complete(messages)
    except Exception as exc:
        logger.error(f"Chat relay failed: {exc}")
        return ChatResponse(reply=SNAG_REPLY)

    return ChatResponse(reply=content or NO_CONTENT_REPLY)


@router.options("")
async def chat_options():
    return Response(status_code=200)


@router.api_route("", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"])
async def chat_placeholder():
    return PlainTextResponse("OK")
