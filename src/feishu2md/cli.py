"""Command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import re
import sys
from pathlib import Path

from feishu2md.config import load_config
from feishu2md.exceptions import Feishu2mdError
from feishu2md.ingestion import ConversionOptions, convert_document

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r'[\\/:*?"<>|\s]+')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feishu2md",
        description="Convert a Feishu/Lark docx or wiki document to Markdown.",
    )
    parser.add_argument("url", help="Document URL, e.g. https://xxx.feishu.cn/docx/<token>")
    parser.add_argument("-o", "--output", default=".", help="Output directory (default: current directory)")
    parser.add_argument("--one-page", action="store_true", help="Inline documents linked from chapter headings")
    parser.add_argument("--html-tags", action="store_true", help="Use HTML tags for bold/italic/strikethrough")
    parser.add_argument("--skip-images", action="store_true", help="Do not download images")
    parser.add_argument("--image-dir", help="Image directory relative to the output directory")
    parser.add_argument("--title-as-filename", action="store_true", help="Name the file after the document title")
    parser.add_argument("--no-cache", action="store_true", help="Always fetch blocks from the API")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def output_filename(title: str, document_id: str, *, title_as_filename: bool) -> str:
    """Pick the Markdown file name for a converted document."""
    stem = document_id
    if title_as_filename and title.strip():
        stem = _UNSAFE_FILENAME_RE.sub("_", title.strip()).strip("_") or document_id
    return f"{stem}.md"


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config()
        output = config.output
        options = ConversionOptions(
            one_page=args.one_page,
            use_html_tags=args.html_tags or output.use_html_tags,
            download_images=not (args.skip_images or output.skip_img_download),
            image_dir=args.image_dir or output.image_dir,
            use_cache=not args.no_cache,
        )
        output_dir = Path(args.output).expanduser()
        output_dir.mkdir(parents=True, exist_ok=True)

        result = asyncio.run(
            convert_document(args.url, options=options, config=config, output_dir=output_dir)
        )
    except Feishu2mdError as exc:
        logger.error("%s", exc)
        return 1

    filename = output_filename(
        result.title,
        result.document_id,
        title_as_filename=args.title_as_filename or output.title_as_filename,
    )
    target = output_dir / filename
    target.write_text(result.markdown, encoding="utf-8")

    print(result.summary)
    print(f"Saved: {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
