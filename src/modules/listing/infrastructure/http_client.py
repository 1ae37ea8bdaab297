"""HTTP data layer for the listing engine, backed by the catalog API."""

from typing import Any

import httpx
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.core.config import settings
from src.modules.listing.application.query_codec import QUERY_KEYS
from src.modules.listing.domain.entities import CategoryCount, PageResult, ViewState


class HttpCatalogClient:
    """PageFetcher and CountsProvider over ``GET /models`` and ``GET /models/counts``.

    GETs are retried on transport errors only. HTTP status errors and the
    final transport error reach whoever awaits the fetch.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_sec: float | None = None,
        client: httpx.AsyncClient | None = None,
        access_token: str | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.CATALOG_API_URL,
            timeout=timeout_sec or settings.CATALOG_HTTP_TIMEOUT_SEC,
            headers=headers,
        )
        self.logger = logger.bind(service="HttpCatalogClient")

    async def __aenter__(self) -> "HttpCatalogClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @staticmethod
    def build_params(view_state: ViewState, page_size: int) -> dict[str, str]:
        """Listing query parameters; absent optional fields are left out."""
        params: dict[str, str] = {}
        for field, key in QUERY_KEYS.items():
            value = getattr(view_state, field)
            if value is None:
                continue
            params[key] = value.value if hasattr(value, "value") else str(value)
        params["pageSize"] = str(page_size)
        return params

    async def fetch_page(self, view_state: ViewState, page_size: int) -> PageResult:
        params = self.build_params(view_state, page_size)
        self.logger.debug(f"Fetching catalog page: {params}")

        return PageResult.model_validate(await self._get("/models", params))

    async def aggregate_counts(self) -> list[CategoryCount]:
        payload = await self._get("/models/counts") or []
        return [CategoryCount.model_validate(row) for row in payload]

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, max=1),
        reraise=True,
    )
    async def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        response = await self._client.get(path, params=params)
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict) or "data" not in body:
            raise ValueError("Catalog response is missing the 'data' envelope")
        return body["data"]
