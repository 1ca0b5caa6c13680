"""Factory pattern for creating chat client instances."""

import logging

from edge_api.adapters.llm.base import AbstractChatClient
from edge_api.adapters.llm.openai_client import OpenAIChatClient
from edge_api.core.config import LLMSettings
from edge_api.core.errors import ConfigurationAppError

logger = logging.getLogger(__name__)


def create_chat_client(config: LLMSettings) -> AbstractChatClient:
    """Instantiate the chat client for the configured provider.

    Called per request so a secret added to the environment of a running
    deployment (and a fresh ``Settings``) is picked up without code changes.

    Args:
        config: LLM provider settings.

    Returns:
        AbstractChatClient: Configured chat client instance.

    Raises:
        ConfigurationAppError: If the API key is missing or the provider is
            unknown.
    """
    provider = config.provider.lower()

    if provider == "openai":
        if not config.api_key:
            logger.error("chat.missing_api_key", extra={"provider": provider})
            raise ConfigurationAppError(
                code="llm_missing_api_key",
                message="Service is not properly configured",
                details={"hint": "Set LLM_API_KEY"},
            )
        return OpenAIChatClient(
            api_key=config.api_key,
            model=config.model,
            system_prompt=config.system_prompt,
            base_url=config.base_url,
            timeout_seconds=config.timeout_seconds,
            max_tokens=config.max_tokens,
        )

    logger.error("chat.unknown_provider", extra={"provider": provider})
    raise ConfigurationAppError(
        code="llm_unknown_provider",
        message="Service is not properly configured",
        details={"hint": f"Unknown LLM provider '{provider}'. Supported providers: openai"},
    )
