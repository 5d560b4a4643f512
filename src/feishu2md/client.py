"""Async client for the Feishu/Lark Open API endpoints used by feishu2md."""

from __future__ import annotations

import logging
from typing import Any, Final

import httpx
from pydantic import ValidationError

from feishu2md.exceptions import ApiError, AuthError, DocumentNotFoundError, RateLimitError
from feishu2md.http_utils import create_client, request_with_retries
from feishu2md.schemas import Block, Document

logger = logging.getLogger(__name__)

BLOCK_PAGE_SIZE: Final[int] = 500

# Open API error codes that have a more specific meaning than ApiError.
_NOT_FOUND_CODES: Final[frozenset[int]] = frozenset({1770002, 131005})
_RATE_LIMIT_CODES: Final[frozenset[int]] = frozenset({99991400})


class FeishuClient:
    """Thin wrapper over the docx, wiki and drive endpoints.

    The tenant access token is requested lazily and reused for the lifetime of
    the client. Use as an async context manager, or pass in an existing
    ``httpx.AsyncClient`` that the caller owns.
    """

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        *,
        api_base: str = "https://open.feishu.cn",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.app_id = app_id
        self.app_secret = app_secret
        self.api_base = api_base.rstrip("/")
        self._http = http_client or create_client()
        self._owns_http = http_client is None
        self._token: str | None = None

    async def __aenter__(self) -> FeishuClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def tenant_access_token(self) -> str:
        """Return the cached tenant access token, fetching it on first use.

        Raises:
            AuthError: If credentials are missing or rejected.
        """
        if self._token:
            return self._token
        if not self.app_id or not self.app_secret:
            raise AuthError("App id and app secret are required (set FEISHU2MD_APP_ID / FEISHU2MD_APP_SECRET)")

        response = await request_with_retries(
            self._http,
            "POST",
            f"{self.api_base}/open-apis/auth/v3/tenant_access_token/internal",
            json={"app_id": self.app_id, "app_secret": self.app_secret},
        )
        payload = _json_payload(response)
        if payload.get("code") != 0 or not payload.get("tenant_access_token"):
            raise AuthError(f"Failed to get tenant access token: {payload.get('msg', 'unknown error')}")
        self._token = payload["tenant_access_token"]
        return self._token

    async def get_document(self, document_token: str) -> Document:
        data = await self._get_data(f"/open-apis/docx/v1/documents/{document_token}")
        try:
            return Document.model_validate(data.get("document") or {})
        except ValidationError as exc:
            raise ApiError(f"Unexpected document payload for {document_token}: {exc}") from exc

    async def get_blocks(self, document_token: str) -> list[Block]:
        """Fetch every block of a document, following pagination."""
        blocks: list[Block] = []
        page_token: str | None = None
        while True:
            params: dict[str, Any] = {"page_size": BLOCK_PAGE_SIZE}
            if page_token:
                params["page_token"] = page_token
            data = await self._get_data(f"/open-apis/docx/v1/documents/{document_token}/blocks", params=params)
            try:
                blocks.extend(Block.model_validate(item) for item in data.get("items") or [])
            except ValidationError as exc:
                raise ApiError(f"Unexpected block payload for {document_token}: {exc}") from exc
            if not data.get("has_more"):
                break
            page_token = data.get("page_token")
            if not page_token:
                break
        logger.debug("Fetched %d blocks for %s", len(blocks), document_token)
        return blocks

    async def get_wiki_node(self, node_token: str) -> tuple[str, str]:
        """Resolve a wiki node to ``(obj_type, obj_token)``."""
        data = await self._get_data("/open-apis/wiki/v2/spaces/get_node", params={"token": node_token})
        node = data.get("node") or {}
        obj_type = node.get("obj_type")
        obj_token = node.get("obj_token")
        if not obj_type or not obj_token:
            raise ApiError(f"Wiki node {node_token} has no object attached")
        return obj_type, obj_token

    async def download_media(self, file_token: str) -> tuple[bytes, str]:
        """Download an image or file; returns its bytes and content type."""
        response = await request_with_retries(
            self._http,
            "GET",
            f"{self.api_base}/open-apis/drive/v1/medias/{file_token}/download",
            headers=await self._auth_headers(),
            on_404_message=f"Media {file_token} not found",
        )
        return response.content, response.headers.get("content-type", "")

    async def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {await self.tenant_access_token()}"}

    async def _get_data(self, path: str, *, params: dict[str, Any] | None = None) -> dict[str, Any]:
        response = await request_with_retries(
            self._http,
            "GET",
            f"{self.api_base}{path}",
            params=params,
            headers=await self._auth_headers(),
        )
        return _unwrap(_json_payload(response), path)


def _json_payload(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise ApiError(f"Malformed response from {response.request.url}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ApiError(f"Malformed response from {response.request.url}: expected a JSON object")
    return payload


def _unwrap(payload: dict[str, Any], path: str) -> dict[str, Any]:
    code = payload.get("code")
    if code == 0:
        return payload.get("data") or {}
    message = f"{path}: {payload.get('msg', 'unknown error')} (code {code})"
    if code in _NOT_FOUND_CODES:
        raise DocumentNotFoundError(message)
    if code in _RATE_LIMIT_CODES:
        raise RateLimitError(message)
    raise ApiError(message, code=code)
