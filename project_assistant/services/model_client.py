"""Language model client."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import anthropic

from ..errors import ModelCallError
from ..utils.logger import get_app_logger


class ModelClient(ABC):
    """Single request/response chat completion interface."""

    @abstractmethod
    async def complete(
        self,
        system: str,
        messages: List[Dict[str, str]],
        model: str,
        max_tokens: int
    ) -> str:
        """
        Ask the model for one reply.

        Args:
            system: System prompt
            messages: Chat history as {"role", "content"} dicts, oldest first
            model: Model identifier
            max_tokens: Reply token budget

        Returns:
            Reply text ("" when the model returned no text block)

        Raises:
            ModelCallError: if the call failed
        """
        pass


class AnthropicModelClient(ModelClient):
    """Anthropic Messages API implementation."""

    def __init__(self, api_key: Optional[str] = None, timeout: float = 60.0):
        self.api_key = api_key
        self.timeout = timeout
        self.logger = get_app_logger()
        self._client: Optional[anthropic.AsyncAnthropic] = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    async def complete(
        self,
        system: str,
        messages: List[Dict[str, str]],
        model: str,
        max_tokens: int
    ) -> str:
        try:
            response = await self.client.messages.create(
                model=model,
                max_tokens=max_tokens,
                system=system,
                messages=messages
            )
        except anthropic.AnthropicError as e:
            self.logger.error(f"Model call failed ({model}): {e}")
            raise ModelCallError(str(e)) from e

        for block in response.content:
            if block.type == "text":
                return block.text
        return ""

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
