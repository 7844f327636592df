"""Clients for the hosted text-generation and image-generation endpoints.

Both clients are constructed once at startup, stored on ``app.state`` and
handed to the services through FastAPI dependencies. Neither retries: a
transport or API failure surfaces as ``InferenceError``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from openai import AsyncOpenAI, OpenAIError
from openai.types import ImagesResponse

from app.utils.exceptions import InferenceError

logger = logging.getLogger(__name__)


class TextGenerationClient:
    """Client for the Hugging Face Inference API text-generation task."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api-inference.huggingface.co",
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}

    async def text_generation(
        self, model: str, inputs: str, parameters: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Run a text-generation request.

        Args:
            model: Hosted model id (e.g. ``EleutherAI/gpt-neo-2.7B``)
            inputs: Prompt text
            parameters: Sampling parameters forwarded as-is

        Returns:
            Dict with at least a ``generated_text`` key

        Raises:
            InferenceError: If the request fails or the reply has no text field
        """
        url = f"{self._base_url}/models/{model}"
        try:
            response = await self._client.post(
                url,
                headers=self._headers,
                json={"inputs": inputs, "parameters": parameters},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise InferenceError(
                f"Text generation returned HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise InferenceError(f"Text generation request failed: {e}") from e

        # The API answers with a list of sequences; take the first one.
        if isinstance(data, list):
            data = data[0] if data else {}
        if not isinstance(data, dict) or "generated_text" not in data:
            raise InferenceError("Text generation reply did not contain generated_text")
        return data

    async def aclose(self) -> None:
        await self._client.aclose()


class ImageGenerationClient:
    """Client for the OpenAI Images API."""

    def __init__(self, api_key: str, client: Optional[AsyncOpenAI] = None) -> None:
        self._api_key = api_key
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client (lazy initialization)."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def generate(self, model: str, prompt: str, n: int = 1, size: str = "1024x1024") -> ImagesResponse:
        """Generate ``n`` images for ``prompt``."""
        try:
            return await self.client.images.generate(model=model, prompt=prompt, n=n, size=size)
        except OpenAIError as e:
            raise InferenceError(f"Image generation failed: {e}") from e

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
