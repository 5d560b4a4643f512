"""Tests for the conversion pipeline."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from factories import block, document, link_run, page, plain, text_block

from feishu2md.config import AppConfig, FeishuConfig
from feishu2md.exceptions import DocumentNotFoundError, InvalidURLError, MissingBlockError
from feishu2md.ingestion import ConversionOptions, convert_document
from feishu2md.schemas import BlockType

ROOT_URL = "https://x.feishu.cn/docx/root"
CHAPTER_URL = "https://x.feishu.cn/docx/chap"
CONFIG = AppConfig(feishu=FeishuConfig(app_id="app", app_secret="secret"))


def _documents(*, chapter_links_back: bool = False) -> dict:
    chapter_children = ["c1", "img2"] + (["back"] if chapter_links_back else [])
    chapter_blocks = [
        page("chap", "Chapter One", chapter_children),
        plain("c1", BlockType.TEXT, "chapter body", parent="chap"),
        block("img2", BlockType.IMAGE, parent="chap", image={"token": "tok2"}),
    ]
    if chapter_links_back:
        chapter_blocks.append(text_block("back", BlockType.HEADING2, link_run("Home", ROOT_URL), parent="chap"))
    return {
        "root": (
            document("root", "Book"),
            [
                page("root", "Book", ["img1", "h", "t"]),
                block("img1", BlockType.IMAGE, parent="root", image={"token": "tok1"}),
                text_block("h", BlockType.HEADING1, link_run("Chapter", CHAPTER_URL), parent="root"),
                plain("t", BlockType.TEXT, "the end", parent="root"),
            ],
        ),
        "chap": (document("chap", "Chapter One"), chapter_blocks),
    }


def _fake_fetch(documents: dict) -> AsyncMock:
    async def fetch(client, url, *, use_cache=True):
        if url.token not in documents:
            raise DocumentNotFoundError(url.token)
        return documents[url.token]

    return AsyncMock(side_effect=fetch)


class TestConvertDocument:
    """Tests for convert_document."""

    @pytest.mark.asyncio
    async def test_plain_conversion_keeps_chapter_link(self) -> None:
        fetch = _fake_fetch(_documents())
        options = ConversionOptions(download_images=False)

        with patch("feishu2md.ingestion.fetch_document", fetch):
            result = await convert_document(ROOT_URL, options=options, config=CONFIG)

        assert result.title == "Book"
        assert result.markdown == f"# Book\n![](tok1)\n\n# [Chapter]({CHAPTER_URL})\n\nthe end\n\n"
        assert result.image_tokens == ["tok1"]
        assert result.chapters == []
        assert fetch.await_count == 1
        assert "Title: Book" in result.summary

    @pytest.mark.asyncio
    async def test_one_page_inlines_chapter(self) -> None:
        fetch = _fake_fetch(_documents())
        options = ConversionOptions(one_page=True, download_images=False)

        with patch("feishu2md.ingestion.fetch_document", fetch):
            result = await convert_document(ROOT_URL, options=options, config=CONFIG)

        assert result.markdown == (
            "# Book\n![](tok1)\n\n## Chapter One\nchapter body\n\n![](tok2)\n\n\nthe end\n\n"
        )
        assert result.image_tokens == ["tok1", "tok2"]
        assert result.chapters == [CHAPTER_URL]
        assert result.block_count == 7

    @pytest.mark.asyncio
    async def test_cycle_back_to_root_is_dropped(self) -> None:
        fetch = _fake_fetch(_documents(chapter_links_back=True))
        options = ConversionOptions(one_page=True, download_images=False)

        with patch("feishu2md.ingestion.fetch_document", fetch):
            result = await convert_document(ROOT_URL, options=options, config=CONFIG)

        assert "## Chapter One\nchapter body\n" in result.markdown
        assert "Home" not in result.markdown
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_missing_chapter_drops_heading(self) -> None:
        documents = _documents()
        del documents["chap"]
        fetch = _fake_fetch(documents)
        options = ConversionOptions(one_page=True, download_images=False)

        with patch("feishu2md.ingestion.fetch_document", fetch):
            result = await convert_document(ROOT_URL, options=options, config=CONFIG)

        assert result.markdown == "# Book\n![](tok1)\n\n\nthe end\n\n"
        assert result.chapters == []

    @pytest.mark.asyncio
    async def test_images_downloaded_and_rewritten(self, tmp_path: Path) -> None:
        fetch = _fake_fetch(_documents())
        download = AsyncMock(return_value={"tok1": "assets/tok1.png", "tok2": "assets/tok2.png"})
        options = ConversionOptions(one_page=True, image_dir="assets")

        with patch("feishu2md.ingestion.fetch_document", fetch):
            with patch("feishu2md.ingestion.download_images", download):
                result = await convert_document(ROOT_URL, options=options, config=CONFIG, output_dir=tmp_path)

        assert "![](assets/tok1.png)" in result.markdown
        assert "![](assets/tok2.png)" in result.markdown
        assert result.image_paths == {"tok1": "assets/tok1.png", "tok2": "assets/tok2.png"}
        _, tokens, output_dir, image_dir = download.await_args.args
        assert tokens == ["tok1", "tok2"]
        assert output_dir == tmp_path
        assert image_dir == "assets"

    @pytest.mark.asyncio
    async def test_html_tags_option(self) -> None:
        documents = {
            "root": (
                document("root", "T"),
                [
                    page("root", "T", ["b"]),
                    text_block("b", BlockType.TEXT, {"text_run": {"content": "x", "text_element_style": {"bold": True}}}, parent="root"),
                ],
            )
        }
        options = ConversionOptions(use_html_tags=True, download_images=False)

        with patch("feishu2md.ingestion.fetch_document", _fake_fetch(documents)):
            result = await convert_document(ROOT_URL, options=options, config=CONFIG)

        assert result.markdown == "# T\n<strong>x</strong>\n\n"

    @pytest.mark.asyncio
    async def test_broken_root_tree_propagates(self) -> None:
        documents = {"root": (document("root", "T"), [page("root", "T", ["ghost"])])}

        with patch("feishu2md.ingestion.fetch_document", _fake_fetch(documents)):
            with pytest.raises(MissingBlockError):
                await convert_document(ROOT_URL, options=ConversionOptions(download_images=False), config=CONFIG)

    @pytest.mark.asyncio
    async def test_invalid_url(self) -> None:
        with pytest.raises(InvalidURLError):
            await convert_document("https://example.com/docx/abc", config=CONFIG)


def _gateway_page(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/tenant_access_token/internal"):
        return httpx.Response(200, json={"code": 0, "tenant_access_token": "t-1"})
    return httpx.Response(200, text="<html>gateway</html>")


@pytest.mark.asyncio
async def test_malformed_chapter_response_drops_heading() -> None:
    documents = _documents()

    async def fetch(client, url, *, use_cache=True):
        if url.token == "chap":
            await client.get_document(url.token)
        return documents[url.token]

    options = ConversionOptions(one_page=True, download_images=False)
    http = httpx.AsyncClient(transport=httpx.MockTransport(_gateway_page))

    with patch("feishu2md.client.create_client", return_value=http):
        with patch("feishu2md.ingestion.fetch_document", AsyncMock(side_effect=fetch)):
            result = await convert_document(ROOT_URL, options=options, config=CONFIG)

    assert result.markdown == "# Book\n![](tok1)\n\n\nthe end\n\n"
    assert result.chapters == []
