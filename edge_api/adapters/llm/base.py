from abc import ABC, abstractmethod

from edge_api.adapters.upstream import UpstreamResult


class AbstractChatClient(ABC):
	"""Interface for LLM clients that answer a single visitor message."""

	@abstractmethod
	async def complete(self, message: str) -> UpstreamResult[str]:
		"""Send one user message with the configured system prompt.

		Args:
			message: Sanitized visitor message.

		Returns:
			UpstreamResult[str]: ``success`` with the reply text, or the
			classified failure (auth_error, upstream_error, network_error,
			timeout). Never raises for provider failures.
		"""
		...
