"""Job-function category lookup.

Uses httpx for async HTTP requests and tenacity for retrying transient
connection failures. A lookup that still fails yields an empty catalog.
"""

import logging
from typing import List, Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from ..models import ApiConfig, CategoryListResponse, JobCategory

logger = logging.getLogger(__name__)


class CategoryServiceError(Exception):
    """Raised when the category endpoint answers with an error status."""
    pass


class CategoryService:
    """Async client for the category catalog.

    Usage:
        async with CategoryService(config.api) as categories:
            job_functions = await categories.fetch_job_functions()
    """

    JOB_FUNCTION = "JOB_FUNCTION"

    def __init__(
        self,
        config: ApiConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "CategoryService":
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={"Accept": "application/json"},
            timeout=30.0,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._client:
            await self._client.aclose()
            self._client = None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def fetch_categories(self, category_type: str) -> List[JobCategory]:
        """Fetch every category of one type.

        Raises:
            CategoryServiceError: For a non-2xx response.
            httpx.TransportError: If the connection keeps failing.
        """
        if not self._client:
            raise CategoryServiceError("Service not initialized. Use async context manager.")

        response = await self._client.get(
            self.config.categories_path,
            params={"type": category_type},
        )

        if not response.is_success:
            raise CategoryServiceError(
                f"Category lookup returned {response.status_code}"
            )

        categories = CategoryListResponse.model_validate(response.json()).categories
        logger.debug(f"Fetched {len(categories)} {category_type} categories")
        return categories

    async def fetch_job_functions(self) -> List[JobCategory]:
        """Fetch the job-function catalog, falling back to an empty list."""
        try:
            return await self.fetch_categories(self.JOB_FUNCTION)
        except (CategoryServiceError, httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch job functions: {e}")
            return []
