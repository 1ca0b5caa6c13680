from __future__ import annotations

from fastapi import APIRouter

from edge_api.core.dependencies import ChatClientProviderDep, JsonBodyDep
from edge_api.schemas.chat import ChatResponse
from edge_api.services.chat_service import ChatService

router = APIRouter(tags=["Chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(body: JsonBodyDep, client_provider: ChatClientProviderDep) -> ChatResponse:
    """Relay a visitor message to the LLM provider.

    Body: ``{"message": str}``. Answers 400 for invalid input, 500 when the
    provider key is missing and 503 when the provider fails or times out.
    """
    return await ChatService(client_provider).reply(body)
