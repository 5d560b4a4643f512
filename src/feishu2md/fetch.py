"""Fetch and cache docx documents."""

from __future__ import annotations

import logging

from feishu2md.cache_utils import (
    cache_path_for,
    is_cache_fresh,
    read_cached_document,
    write_cached_document,
)
from feishu2md.client import FeishuClient
from feishu2md.config import FEISHU2MD_CACHE_PATH, FEISHU2MD_CACHE_TTL_SECONDS
from feishu2md.exceptions import UnsupportedDocumentError
from feishu2md.schemas import Block, Document, DocumentURL

logger = logging.getLogger(__name__)


async def resolve_document_token(client: FeishuClient, url: DocumentURL) -> str:
    """Return the docx token for ``url``, following wiki nodes to their object.

    Raises:
        UnsupportedDocumentError: If a wiki node holds something other than
            a docx document (sheets, bitables, legacy docs...).
    """
    if url.doc_type == "docx":
        return url.token
    obj_type, obj_token = await client.get_wiki_node(url.token)
    if obj_type != "docx":
        raise UnsupportedDocumentError(f"Wiki node {url.token} is a {obj_type!r}, only docx documents are supported")
    logger.debug("Wiki node %s resolved to docx %s", url.token, obj_token)
    return obj_token


async def fetch_document(
    client: FeishuClient,
    url: DocumentURL,
    *,
    use_cache: bool = True,
) -> tuple[Document, list[Block]]:
    """Fetch a document and its flat block list, using the local cache.

    Args:
        client: Authenticated API client for the URL's domain.
        url: Parsed document URL.
        use_cache: Whether to use a fresh cached copy if available.

    Returns:
        The document descriptor and all of its blocks.

    Raises:
        FetchError: If the API cannot be reached or rejects the request.
        UnsupportedDocumentError: If a wiki URL does not point at a docx.
    """
    document_token = await resolve_document_token(client, url)
    cache_path = cache_path_for(document_token, FEISHU2MD_CACHE_PATH)

    if use_cache and is_cache_fresh(cache_path, FEISHU2MD_CACHE_TTL_SECONDS):
        cached = await read_cached_document(cache_path)
        if cached is not None:
            logger.debug("Using cached blocks for %s", document_token)
            return cached

    document = await client.get_document(document_token)
    blocks = await client.get_blocks(document_token)
    if use_cache:
        await write_cached_document(cache_path, document, blocks)
    return document, blocks
