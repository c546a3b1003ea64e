"""
Chat router: POST /api/chat endpoint.

Receives the widget's message with its file context and returns the
provider's reply, or a structured error when the provider fails.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from devassist.core.errors import ProviderError
from devassist.models.chat import ChatRequest, ChatResponse, ErrorResponse

router = APIRouter(prefix="/api", tags=["chat"])

CHAT_FAILED = "Failed to get AI response"


def get_chat_relay():
    """
    Dependency injection for the chat relay.
    Initialized once in main.py and stored in app.state.
    """
    from devassist.main import app

    return app.state.chat_relay


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={500: {"model": ErrorResponse}},
)
async def chat(request: ChatRequest, relay=Depends(get_chat_relay)):
    """
    Ask the assistant a question.

    The message and file context are forwarded to the provider as one
    system + user prompt; the first reply is returned.
    """
    try:
        reply = await relay.chat(
            message=request.message,
            file_context=request.file_context,
            system_prompt=request.system_prompt,
        )
    except ProviderError as exc:
        body = ErrorResponse(error=CHAT_FAILED, details=exc.details)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
        )
    return ChatResponse(reply=reply)
