"""
HTTP client for the Memorial Planner API.

Used by the content browser and the admin commands. Any non-success
response becomes an ApiError carrying the server's message.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import httpx

from memorial.core.errors import ApiError

DEFAULT_FILENAME = "funeral_plan.pdf"

_FILENAME_PATTERN = re.compile(r'filename="?(.+?)"?(;|$)')


@dataclass
class GeneratedDocument:
    """A downloaded document."""

    filename: str
    data: bytes
    content_type: str = "application/pdf"


def filename_from_disposition(header: str | None, default: str = DEFAULT_FILENAME) -> str:
    """Pull the filename hint out of a Content-Disposition header."""
    if header:
        match = _FILENAME_PATTERN.search(header)
        if match and match.group(1):
            return match.group(1)
    return default


class ContentClient:
    """
    Async client for the content and document endpoints.

    Example:
        async with ContentClient("http://localhost:3001") as client:
            readings = await client.list_items("readings")
    """

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> ContentClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise ApiError(f"Could not reach the server: {e}", status_code=0) from e

        if response.is_error:
            raise ApiError(_error_message(response), status_code=response.status_code)
        return response

    # =========================================================================
    # Content
    # =========================================================================

    async def list_categories(self) -> list[dict[str, Any]]:
        response = await self._request("GET", "/api/categories")
        return response.json()

    async def list_items(self, category: str) -> list[dict[str, Any]]:
        response = await self._request("GET", f"/api/content/{category}")
        return response.json()

    async def create_item(
        self,
        category: str,
        title: str,
        content: str | None = None,
        link: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"title": title}
        if content is not None:
            body["content"] = content
        if link is not None:
            body["link"] = link
        response = await self._request("POST", f"/api/content/{category}", json=body)
        return response.json()

    async def delete_item(self, category: str, item_id: str) -> dict[str, Any]:
        response = await self._request("DELETE", f"/api/content/{category}/{item_id}")
        return response.json()

    # =========================================================================
    # Documents
    # =========================================================================

    async def generate_pdf(self, wishlist: dict[str, list[str]]) -> GeneratedDocument:
        """Request the service plan for a wishlist of ids."""
        response = await self._request(
            "POST", "/api/pdf/generate", json={"wishlist": wishlist}
        )
        return GeneratedDocument(
            filename=filename_from_disposition(response.headers.get("content-disposition")),
            data=response.content,
            content_type=response.headers.get("content-type", "application/pdf"),
        )


def _error_message(response: httpx.Response) -> str:
    message = f"Request failed. Status: {response.status_code}"
    try:
        data = response.json()
    except ValueError:
        return message
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return message
