"""LLM adapter layer - abstracts over chat completion providers."""

from edge_api.adapters.llm.base import AbstractChatClient
from edge_api.adapters.llm.factory import create_chat_client
from edge_api.adapters.llm.openai_client import OpenAIChatClient

__all__ = [
    "AbstractChatClient",
    "OpenAIChatClient",
    "create_chat_client",
]
