"""Chat service proxying visitor messages to the LLM provider."""

from __future__ import annotations

import logging
from typing import Any, Callable

from edge_api.adapters.llm.base import AbstractChatClient
from edge_api.core.errors import ValidationAppError
from edge_api.schemas.chat import ChatResponse
from edge_api.services.upstream_errors import raise_for_upstream
from edge_api.utils.validators import validate_chat

logger = logging.getLogger(__name__)


class ChatService:
    """Validate a chat message and relay it to the chat provider.

    Attributes:
        client_provider: Builds the chat client; raises
            ``ConfigurationAppError`` when the provider key is missing.
    """

    def __init__(self, client_provider: Callable[[], AbstractChatClient]) -> None:
        self.client_provider = client_provider

    async def reply(self, body: Any) -> ChatResponse:
        """Answer one chat message.

        Raises:
            ValidationAppError: Message missing, not a string or empty.
            ConfigurationAppError: Provider key not configured.
            UpstreamAuthAppError / UpstreamAppError /
            UpstreamUnavailableAppError: Provider failure.
        """
        validation = validate_chat(body)
        if not validation.valid:
            raise ValidationAppError(code="invalid_chat_request", message=validation.error)

        client = self.client_provider()
        result = await client.complete(validation.data)
        raise_for_upstream(result, upstream="chat")

        logger.info("chat.replied", extra={"reply_length": len(result.payload)})
        return ChatResponse(reply=result.payload)
