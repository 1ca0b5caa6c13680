"""OpenAI-compatible chat completion adapter."""

import asyncio
import logging

import openai
from openai import AsyncOpenAI

from edge_api.adapters.llm.base import AbstractChatClient
from edge_api.adapters.upstream import UpstreamResult, extract_error_message

logger = logging.getLogger(__name__)

NO_REPLY_TEXT = "No response generated"


class OpenAIChatClient(AbstractChatClient):
    """Client for OpenAI-compatible chat completions.

    Uses the official OpenAI Python SDK with async support. SDK retries are
    disabled: a failed call is reported once. The whole call runs under a
    timeout and is cancelled when it expires.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        system_prompt: str,
        base_url: str | None = None,
        timeout_seconds: float = 30.0,
        max_tokens: int = 1024,
    ) -> None:
        """Initialize OpenAI async client.

        Args:
            api_key: Provider API key.
            model: Model name (e.g., "gpt-4o-mini").
            system_prompt: Instructions sent as the system message.
            base_url: Optional custom base URL for compatible providers.
            timeout_seconds: Timeout for the whole call in seconds.
            max_tokens: Maximum tokens generated per reply.
        """
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self.model = model
        self.system_prompt = system_prompt
        self.timeout_seconds = timeout_seconds
        self.max_tokens = max_tokens

    async def complete(self, message: str) -> UpstreamResult[str]:
        """Ask the model for a reply to ``message``.

        Returns:
            UpstreamResult[str]: reply text on success, classified failure
            otherwise.
        """
        request_params = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": message},
            ],
        }

        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(**request_params),
                timeout=self.timeout_seconds,
            )
        except (asyncio.TimeoutError, openai.APITimeoutError):
            logger.warning(
                "chat.upstream_timeout",
                extra={"model": self.model, "timeout_s": self.timeout_seconds},
            )
            return UpstreamResult.timeout("Request timed out. Please try again.")
        except openai.AuthenticationError as exc:
            logger.error(
                "chat.upstream_auth_failed",
                extra={"model": self.model, "upstream_status": exc.status_code},
            )
            return UpstreamResult.auth_error(
                exc.status_code,
                "API authentication failed. Please check your API key.",
            )
        except openai.APIStatusError as exc:
            error_message = extract_error_message(
                exc.body,
                "Failed to get response from AI service",
            )
            logger.error(
                "chat.upstream_error",
                extra={
                    "model": self.model,
                    "upstream_status": exc.status_code,
                    "error_msg": error_message,
                },
            )
            return UpstreamResult.upstream_error(exc.status_code, error_message)
        except openai.APIConnectionError as exc:
            logger.error(
                "chat.upstream_unreachable",
                extra={"model": self.model, "error_type": type(exc).__name__},
            )
            return UpstreamResult.network_error(
                "An error occurred while processing your message. Please try again."
            )

        content = None
        if response.choices:
            content = response.choices[0].message.content
        reply = (content or "").strip() or NO_REPLY_TEXT
        return UpstreamResult.success(reply)
