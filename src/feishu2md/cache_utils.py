"""Local cache of fetched documents and their blocks."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from feishu2md.schemas import Block, Document

logger = logging.getLogger(__name__)


def is_cache_fresh(path: Path, ttl_seconds: int) -> bool:
    """Check if a cached file is still fresh based on its modification time.

    A TTL of zero or less means cached entries never expire.
    """
    if not path.exists():
        return False
    if ttl_seconds <= 0:
        return True
    mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    age_seconds = (datetime.now(timezone.utc) - mtime).total_seconds()
    return age_seconds <= ttl_seconds


def cache_path_for(document_token: str, base_path: Path) -> Path:
    """Return the JSON file that caches ``document_token``."""
    return base_path / f"{document_token.replace('/', '_')}.json"


def _read_entry(path: Path) -> tuple[Document, list[Block]] | None:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        document = Document.model_validate(raw["document"])
        blocks = [Block.model_validate(item) for item in raw["blocks"]]
    except (OSError, KeyError, TypeError, json.JSONDecodeError, ValidationError) as exc:
        logger.debug("Ignoring unreadable cache entry %s: %s", path, exc)
        return None
    return document, blocks


def _write_entry(path: Path, document: Document, blocks: list[Block]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "document": document.model_dump(mode="json"),
        "blocks": [block.model_dump(mode="json", exclude_none=True) for block in blocks],
    }
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


async def read_cached_document(path: Path) -> tuple[Document, list[Block]] | None:
    """Load a cached document; corrupt or partial entries read as a miss."""
    return await asyncio.to_thread(_read_entry, path)


async def write_cached_document(path: Path, document: Document, blocks: list[Block]) -> None:
    await asyncio.to_thread(_write_entry, path, document, blocks)
