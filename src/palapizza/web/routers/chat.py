from fastapi import APIRouter
from pydantic import BaseModel, Field

from palapizza.core.modules.chat.models import ChatMessage
from palapizza.web.deps import AppDep
from palapizza.web.openapi import ErrorResponse

router = APIRouter(prefix="/chat", tags=["chat"])


class ChatRequest(BaseModel):
    message: str = Field("", max_length=2000)
    history: list[ChatMessage] = Field(default_factory=list)


class ChatResponse(BaseModel):
    reply: str


@router.post(
    "",
    summary="Ask the assistant",
    operation_id="chat",
    responses={
        400: {"model": ErrorResponse, "description": "Empty message"},
        500: {"model": ErrorResponse, "description": "Chat provider not configured"},
        502: {"model": ErrorResponse, "description": "Chat provider error"},
    },
)
async def chat(request: ChatRequest, app: AppDep) -> ChatResponse:
    return ChatResponse(reply=await app.chat(request.message, request.history))


@router.get("/greeting", summary="Opening message of the chat widget", operation_id="chatGreeting")
async def greeting(app: AppDep) -> ChatResponse:
    return ChatResponse(reply=app.chat_greeting)
