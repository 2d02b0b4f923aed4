"""Typed model of the Google Docs API document tree.

The Docs API returns each structural element as a JSON object where exactly
one of ``paragraph``, ``table`` or ``sectionBreak`` is set. These models turn
that "oneof" into an explicit tagged union once, when the tree is parsed, so
the renderer never has to probe raw keys.

All fields are optional and default to empty values. An explicit JSON null is
treated like an absent field, and unknown fields from the API are ignored.
"""

from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, model_validator
from pydantic.alias_generators import to_camel

from .types import NamedStyleType


class DocsNode(BaseModel):
    """Base for all document tree nodes: immutable, camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Drop null fields so their defaults apply."""
        if isinstance(data, Mapping):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Link(DocsNode):
    """Hyperlink attached to a text run."""

    url: str | None = None


class TextStyle(DocsNode):
    """Character styling for a text run."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    link: Link | None = None


class TextRun(DocsNode):
    """A span of text sharing one set of style flags."""

    content: str = ""
    text_style: TextStyle = Field(default_factory=TextStyle)


class ParagraphElement(DocsNode):
    """One element of a paragraph. Only text runs carry renderable text."""

    text_run: TextRun | None = None


class ParagraphStyle(DocsNode):
    named_style_type: str = NamedStyleType.NORMAL_TEXT.value


class Paragraph(DocsNode):
    """A paragraph: named style, optional bullet marker and its elements."""

    paragraph_style: ParagraphStyle = Field(default_factory=ParagraphStyle)
    bullet: dict[str, Any] | None = None
    elements: tuple[ParagraphElement, ...] = ()

    @property
    def is_list_item(self) -> bool:
        """True when the paragraph carries a bullet, whatever its contents."""
        return self.bullet is not None


class TableCell(DocsNode):
    content: tuple["Block", ...] = ()


class TableRow(DocsNode):
    table_cells: tuple[TableCell, ...] = ()


class Table(DocsNode):
    table_rows: tuple[TableRow, ...] = ()


class ParagraphBlock(DocsNode):
    kind: ClassVar[str] = "paragraph"

    paragraph: Paragraph = Field(default_factory=Paragraph)


class TableBlock(DocsNode):
    kind: ClassVar[str] = "table"

    table: Table = Field(default_factory=Table)


class SectionBreakBlock(DocsNode):
    kind: ClassVar[str] = "section_break"

    section_break: dict[str, Any] = Field(default_factory=dict)


class UnsupportedBlock(DocsNode):
    """Structural element of a kind the renderer does not handle (e.g. tableOfContents)."""

    kind: ClassVar[str] = "unsupported"


# Raw key -> block tag, checked in this order
_BLOCK_KEYS: tuple[tuple[str, str], ...] = (
    ("paragraph", ParagraphBlock.kind),
    ("table", TableBlock.kind),
    ("sectionBreak", SectionBreakBlock.kind),
    ("section_break", SectionBreakBlock.kind),
)


def block_kind(value: Any) -> str:
    """Decide which block variant a raw structural element belongs to.

    Args:
        value: Raw mapping from the API, or an already constructed block.

    Returns:
        Tag of the matching block model.
    """
    if isinstance(value, DocsNode):
        return getattr(value, "kind", UnsupportedBlock.kind)
    if isinstance(value, Mapping):
        for key, tag in _BLOCK_KEYS:
            if value.get(key) is not None:
                return tag
    return UnsupportedBlock.kind


Block = Annotated[
    Union[
        Annotated[ParagraphBlock, Tag(ParagraphBlock.kind)],
        Annotated[TableBlock, Tag(TableBlock.kind)],
        Annotated[SectionBreakBlock, Tag(SectionBreakBlock.kind)],
        Annotated[UnsupportedBlock, Tag(UnsupportedBlock.kind)],
    ],
    Discriminator(block_kind),
]


class Body(DocsNode):
    content: tuple[Block, ...] = ()


class Document(DocsNode):
    """Root of a Google Docs document."""

    document_id: str | None = None
    title: str | None = None
    body: Body | None = None

    @property
    def is_empty(self) -> bool:
        """True when there is no body or the body has no structural elements."""
        return self.body is None or not self.body.content


TableCell.model_rebuild()
TableRow.model_rebuild()
Table.model_rebuild()
TableBlock.model_rebuild()


def parse_document(data: Mapping[str, Any]) -> Document:
    """Build a typed document tree from a Docs API ``documents.get`` response.

    Args:
        data: Parsed JSON document.

    Returns:
        Immutable Document model.

    Raises:
        pydantic.ValidationError: If ``data`` is not a mapping or holds values
            of the wrong type.
    """
    return Document.model_validate(data)
