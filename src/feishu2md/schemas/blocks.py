"""Docx block tree models as returned by the Open API."""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, Field


class BlockType(IntEnum):
    """Block type tags of the docx API (only the rendered subset)."""

    PAGE = 1
    TEXT = 2
    HEADING1 = 3
    HEADING2 = 4
    HEADING3 = 5
    HEADING4 = 6
    HEADING5 = 7
    HEADING6 = 8
    HEADING7 = 9
    HEADING8 = 10
    HEADING9 = 11
    BULLET = 12
    ORDERED = 13
    CODE = 14
    QUOTE = 15
    EQUATION = 16
    TODO = 17
    DIVIDER = 22
    IMAGE = 27
    TABLE = 31
    TABLE_CELL = 32
    QUOTE_CONTAINER = 34


HEADING_TYPES = frozenset(range(BlockType.HEADING1, BlockType.HEADING9 + 1))

# Payload key under which each text-bearing block carries its elements.
TEXT_PAYLOAD_FIELDS: dict[int, str] = {
    BlockType.PAGE: "page",
    BlockType.TEXT: "text",
    BlockType.BULLET: "bullet",
    BlockType.ORDERED: "ordered",
    BlockType.CODE: "code",
    BlockType.QUOTE: "quote",
    BlockType.EQUATION: "equation",
    BlockType.TODO: "todo",
    **{level: f"heading{level - BlockType.HEADING1 + 1}" for level in HEADING_TYPES},
}


class Link(BaseModel):
    url: str = ""


class TextStyle(BaseModel):
    """Inline style flags of a text run."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    inline_code: bool = False
    link: Link | None = None


class TextRun(BaseModel):
    content: str = ""
    text_element_style: TextStyle | None = None


class MentionUser(BaseModel):
    user_id: str = ""


class MentionDoc(BaseModel):
    token: str = ""
    title: str = ""
    url: str = ""


class InlineEquation(BaseModel):
    content: str = ""


class TextElement(BaseModel):
    """One inline element; exactly one of the fields is set by the API."""

    text_run: TextRun | None = None
    mention_user: MentionUser | None = None
    mention_doc: MentionDoc | None = None
    equation: InlineEquation | None = None


class TextBlockStyle(BaseModel):
    language: int | None = None
    done: bool = False


class TextBlock(BaseModel):
    """Payload shared by every text-bearing block."""

    elements: list[TextElement] = Field(default_factory=list)
    style: TextBlockStyle = Field(default_factory=TextBlockStyle)


class ImagePayload(BaseModel):
    token: str = ""
    width: int | None = None
    height: int | None = None


class TableProperty(BaseModel):
    row_size: int = 0
    column_size: int = 0


class TablePayload(BaseModel):
    cells: list[str] = Field(default_factory=list)
    property: TableProperty = Field(default_factory=TableProperty)


class Block(BaseModel):
    """A node of the document tree, linked to others by id."""

    block_id: str
    parent_id: str = ""
    children: list[str] = Field(default_factory=list)
    block_type: int

    page: TextBlock | None = None
    text: TextBlock | None = None
    heading1: TextBlock | None = None
    heading2: TextBlock | None = None
    heading3: TextBlock | None = None
    heading4: TextBlock | None = None
    heading5: TextBlock | None = None
    heading6: TextBlock | None = None
    heading7: TextBlock | None = None
    heading8: TextBlock | None = None
    heading9: TextBlock | None = None
    bullet: TextBlock | None = None
    ordered: TextBlock | None = None
    code: TextBlock | None = None
    quote: TextBlock | None = None
    equation: TextBlock | None = None
    todo: TextBlock | None = None
    image: ImagePayload | None = None
    table: TablePayload | None = None

    @property
    def text_payload(self) -> TextBlock:
        """Return the text payload for this block type, empty if absent."""
        field = TEXT_PAYLOAD_FIELDS.get(self.block_type)
        payload = getattr(self, field) if field else None
        return payload or TextBlock()

    @property
    def heading_level(self) -> int | None:
        if self.block_type in HEADING_TYPES:
            return self.block_type - BlockType.HEADING1 + 1
        return None


class Document(BaseModel):
    """Root descriptor of a fetched docx document."""

    document_id: str
    revision_id: int | None = None
    title: str = ""
