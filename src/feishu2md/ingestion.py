"""Conversion pipeline for Feishu/Lark docx -> Markdown."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from feishu2md.assets import download_images, rewrite_image_links
from feishu2md.block_index import BlockIndex
from feishu2md.chapters import find_chapter_links
from feishu2md.client import FeishuClient
from feishu2md.config import DEFAULT_IMAGE_DIR, AppConfig, load_config
from feishu2md.context import RenderContext
from feishu2md.exceptions import ChapterCycleError, Feishu2mdError
from feishu2md.fetch import fetch_document
from feishu2md.output_formatter import format_summary
from feishu2md.renderer import INDENT_UNIT, BlockRenderer
from feishu2md.schemas import ConversionResult, Document, DocumentURL
from feishu2md.url_parser import parse_document_url

logger = logging.getLogger(__name__)

# Chapters are rendered one level in, then lose that leading indent unit.
CHAPTER_INDENT_LEVEL = 1


@dataclass
class ConversionOptions:
    """Options for document conversion.

    Attributes:
        one_page: If True, headings that link to other documents are replaced
            by the linked documents.
        use_html_tags: If True, emphasis renders as ``<strong>``/``<em>``/``<del>``.
        download_images: If True, images are saved under ``image_dir`` and
            their links rewritten to the local files.
        image_dir: Image directory, relative to the output directory.
        use_cache: Whether to reuse fresh cached block listings.
    """

    one_page: bool = False
    use_html_tags: bool = False
    download_images: bool = True
    image_dir: str = DEFAULT_IMAGE_DIR
    use_cache: bool = True

    @property
    def context(self) -> RenderContext:
        return RenderContext(use_html_tags=self.use_html_tags, one_page=self.one_page)


@dataclass
class _Converted:
    document: Document
    markdown: str
    block_count: int
    image_tokens: list[str] = field(default_factory=list)
    chapters: list[str] = field(default_factory=list)


def _visit_key(url: DocumentURL) -> str:
    return f"{url.doc_type}/{url.token}"


async def convert_document(
    url: str,
    *,
    options: ConversionOptions | None = None,
    config: AppConfig | None = None,
    output_dir: Path | None = None,
) -> ConversionResult:
    """Fetch a document, render it to Markdown and save its images.

    Args:
        url: Document or wiki URL.
        options: Conversion options. Uses defaults if None.
        config: Credentials and output preferences. Loaded from the
            environment and config file if None.
        output_dir: Directory images are saved relative to. Defaults to the
            current directory.

    Returns:
        The rendered Markdown with image links rewritten, plus metadata.

    Raises:
        InvalidURLError: If ``url`` is not a document URL.
        FetchError: If the top-level document cannot be fetched.
        MissingBlockError: If the fetched block tree is inconsistent.
    """
    opts = options or ConversionOptions()
    cfg = config or load_config()
    parsed = parse_document_url(url)

    async with FeishuClient(cfg.feishu.app_id, cfg.feishu.app_secret, api_base=parsed.api_base) as client:
        converted = await _convert(
            client,
            parsed,
            opts,
            visited=frozenset({_visit_key(parsed)}),
            indent_level=0,
        )

        markdown = converted.markdown
        image_paths: dict[str, str] = {}
        if opts.download_images and converted.image_tokens:
            image_paths = await download_images(
                client, converted.image_tokens, output_dir or Path.cwd(), opts.image_dir
            )
            markdown = rewrite_image_links(markdown, image_paths)

    summary = format_summary(
        title=converted.document.title,
        document_id=converted.document.document_id,
        markdown=markdown,
        block_count=converted.block_count,
        image_count=len(converted.image_tokens),
        chapters=converted.chapters,
    )
    return ConversionResult(
        title=converted.document.title,
        document_id=converted.document.document_id,
        markdown=markdown,
        image_tokens=converted.image_tokens,
        image_paths=image_paths,
        chapters=converted.chapters,
        block_count=converted.block_count,
        summary=summary,
    )


async def _convert(
    client: FeishuClient,
    url: DocumentURL,
    options: ConversionOptions,
    *,
    visited: frozenset[str],
    indent_level: int,
) -> _Converted:
    document, blocks = await fetch_document(client, url, use_cache=options.use_cache)
    context = options.context
    index = BlockIndex(blocks)
    root = index.root(document)

    # Chapters are fetched up front so that rendering itself stays synchronous.
    resolved: dict[str, _Converted] = {}
    failures: dict[str, Feishu2mdError] = {}
    if context.one_page:
        for link in find_chapter_links(index, root, context):
            try:
                resolved[link] = await _convert_chapter(client, link, options, visited)
            except Feishu2mdError as exc:
                failures[link] = exc

    renderer = BlockRenderer(index, context)
    chapters: list[str] = []

    def resolve(link: str) -> str:
        if link not in resolved:
            raise failures.get(link) or Feishu2mdError(f"Chapter {link} was not loaded")
        chapter = resolved[link]
        renderer.image_tokens.extend(chapter.image_tokens)
        chapters.append(link)
        chapters.extend(chapter.chapters)
        return chapter.markdown

    renderer.resolver = resolve
    markdown = renderer.render(root, indent_level)
    return _Converted(
        document=document,
        markdown=markdown,
        block_count=len(index) + sum(chapter.block_count for chapter in resolved.values()),
        image_tokens=renderer.image_tokens,
        chapters=chapters,
    )


async def _convert_chapter(
    client: FeishuClient,
    link: str,
    options: ConversionOptions,
    visited: frozenset[str],
) -> _Converted:
    parsed = parse_document_url(link)
    key = _visit_key(parsed)
    if key in visited:
        raise ChapterCycleError(f"Chapter {link} links back to a document already being converted")
    logger.info("Loading chapter %s", link)
    chapter = await _convert(
        client,
        parsed,
        options,
        visited=visited | {key},
        indent_level=CHAPTER_INDENT_LEVEL,
    )
    chapter.markdown = chapter.markdown[len(INDENT_UNIT) * CHAPTER_INDENT_LEVEL :]
    return chapter
