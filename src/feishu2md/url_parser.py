"""Parse Feishu/Lark document URLs."""

from __future__ import annotations

import re
from typing import Final

from feishu2md.exceptions import InvalidURLError
from feishu2md.schemas import DocumentURL

DOCUMENT_URL_RE: Final[re.Pattern[str]] = re.compile(
    r"^https://[a-zA-Z0-9-]+\.(feishu\.cn|larksuite\.com)/(docx|wiki)/([a-zA-Z0-9]+)"
)

API_BASES: Final[dict[str, str]] = {
    "feishu.cn": "https://open.feishu.cn",
    "larksuite.com": "https://open.larksuite.com",
}


def is_document_url(url: str) -> bool:
    """Return True if ``url`` points at a docx document or a wiki node."""
    return DOCUMENT_URL_RE.match(url) is not None


def parse_document_url(input_text: str) -> DocumentURL:
    """Parse a document URL into domain, document type and token.

    Anything after the token (query string, fragment, trailing path) is
    ignored.

    Raises:
        InvalidURLError: If the URL is not a Feishu/Lark docx or wiki URL.
    """
    url = input_text.strip()
    match = DOCUMENT_URL_RE.match(url)
    if match is None:
        raise InvalidURLError(
            f"Invalid feishu/larksuite URL format: {input_text!r} "
            "(expected https://<tenant>.feishu.cn/docx/<token> or /wiki/<token>)"
        )
    domain, doc_type, token = match.groups()
    return DocumentURL(
        input_text=input_text,
        domain=domain,
        doc_type=doc_type,
        token=token,
        api_base=API_BASES[domain],
    )
