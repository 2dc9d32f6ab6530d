"""Clients for the streamed AI analysis and generation endpoints.

Uses httpx for async streaming requests. Calls are never retried here:
a failed request surfaces as RequestError and retrying is the user's call.
"""

import logging
from typing import Any, AsyncIterator, Dict, Optional, Protocol, Union

import httpx

from ..errors import RequestError
from ..models import ApiConfig, AppConfig

logger = logging.getLogger(__name__)


class AIClient(Protocol):
    """Protocol for a source of streamed analysis/generation responses.

    Both methods return the raw response body as an async iterator of
    chunks; callers drain it before interpreting anything.
    """

    def stream_analysis(self, payload: Dict[str, Any]) -> AsyncIterator[Union[bytes, str]]:
        """Stream the job analysis for ``{jobDescription, currentSkills}``."""
        ...

    def stream_generation(self, payload: Dict[str, Any]) -> AsyncIterator[Union[bytes, str]]:
        """Stream generated resume content for the selected skills."""
        ...


class HttpAIClient:
    """Async client for the resume web service's AI routes.

    Usage:
        async with HttpAIClient(config.api) as client:
            async for chunk in client.stream_analysis(payload):
                ...
    """

    def __init__(
        self,
        config: ApiConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpAIClient":
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={"Content-Type": "application/json"},
            timeout=self.config.timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._client:
            await self._client.aclose()
            self._client = None

    def stream_analysis(self, payload: Dict[str, Any]) -> AsyncIterator[bytes]:
        return self._post_stream(self.config.analyze_path, payload)

    def stream_generation(self, payload: Dict[str, Any]) -> AsyncIterator[bytes]:
        return self._post_stream(self.config.generate_path, payload)

    async def _post_stream(self, path: str, payload: Dict[str, Any]) -> AsyncIterator[bytes]:
        """POST ``payload`` and yield the response body as it arrives.

        Raises:
            RequestError: On transport failure or a non-2xx status.
        """
        if not self._client:
            raise RequestError("Client not initialized. Use async context manager.")

        try:
            async with self._client.stream("POST", path, json=payload) as response:
                if not response.is_success:
                    raise RequestError(
                        f"POST {path} returned {response.status_code}",
                        status_code=response.status_code,
                    )

                logger.debug(f"Streaming response from {path}")
                async for chunk in response.aiter_bytes():
                    yield chunk
        except httpx.HTTPError as e:
            raise RequestError(f"POST {path} failed: {e}") from e


def build_ai_client(config: AppConfig):
    """Create the AI client selected by ``config.backend``.

    Both clients are async context managers.
    """
    if config.backend == "llm":
        from .llm_service import LLMService
        return LLMService(config.llm)

    return HttpAIClient(config.api)
