"""Download document images and point Markdown links at the local files."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path, PurePosixPath
from typing import Iterable

from feishu2md.client import FeishuClient
from feishu2md.exceptions import FetchError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EXTENSION = ".png"


def extension_for(content_type: str) -> str:
    """Pick a file extension from a response content type."""
    mime = content_type.split(";", 1)[0].strip().lower()
    if not mime:
        return DEFAULT_IMAGE_EXTENSION
    return mimetypes.guess_extension(mime) or DEFAULT_IMAGE_EXTENSION


async def download_images(
    client: FeishuClient,
    tokens: Iterable[str],
    output_dir: Path,
    image_dir: str,
) -> dict[str, str]:
    """Save each distinct image token under ``output_dir / image_dir``.

    Returns a mapping of token to the file path relative to ``output_dir``
    (POSIX separators, ready for Markdown). Tokens that fail to download or
    save are logged and left out of the mapping.
    """
    target_dir = output_dir / image_dir
    paths: dict[str, str] = {}
    for token in tokens:
        if not token or token in paths:
            continue
        try:
            content, content_type = await client.download_media(token)
        except FetchError as exc:
            logger.warning("Failed to download image %s: %s", token, exc)
            continue
        filename = token + extension_for(content_type)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            (target_dir / filename).write_bytes(content)
        except OSError as exc:
            logger.warning("Failed to save image %s: %s", token, exc)
            continue
        paths[token] = str(PurePosixPath(image_dir, filename))
        logger.debug("Saved image %s to %s", token, paths[token])
    return paths


def rewrite_image_links(markdown: str, paths: dict[str, str]) -> str:
    """Replace ``![](token)`` references with the downloaded file paths."""
    for token, path in paths.items():
        markdown = markdown.replace(f"![]({token})", f"![]({path})")
    return markdown
