"""Conversion output model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
    """Final conversion output."""

    title: str
    document_id: str
    markdown: str
    image_tokens: list[str] = Field(default_factory=list)
    image_paths: dict[str, str] = Field(default_factory=dict)
    chapters: list[str] = Field(default_factory=list)
    block_count: int = 0
    summary: str = ""
