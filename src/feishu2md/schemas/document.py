"""Parsed document URL model."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class DocumentURL(BaseModel):
    """Parsed Feishu/Lark document URL.

    Attributes:
        input_text: The original URL provided by the user.
        domain: Either ``feishu.cn`` or ``larksuite.com``.
        doc_type: ``docx`` for documents, ``wiki`` for wiki nodes.
        token: The document or wiki node token.
        api_base: Open API base URL for the domain.
    """

    input_text: str
    domain: Literal["feishu.cn", "larksuite.com"]
    doc_type: Literal["docx", "wiki"]
    token: str
    api_base: str
