"""Semantic Markdown AST node variants.

Every node is a small dataclass carrying a class-level ``type`` tag. The set
of variants is closed: the translator only produces these, and the renderer
dispatches on ``node.type``.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union

# Region tags kept as ``semanticHtml`` nodes
SEMANTIC_HTML_TYPES = (
    "article",
    "aside",
    "details",
    "figcaption",
    "figure",
    "footer",
    "header",
    "main",
    "mark",
    "nav",
    "section",
    "summary",
    "time",
)


@dataclass
class TextNode:
    content: str

    type: ClassVar[str] = "text"


@dataclass
class BoldNode:
    content: Union[str, "list[Node]"]

    type: ClassVar[str] = "bold"


@dataclass
class ItalicNode:
    content: Union[str, "list[Node]"]

    type: ClassVar[str] = "italic"


@dataclass
class StrikethroughNode:
    content: Union[str, "list[Node]"]

    type: ClassVar[str] = "strikethrough"


@dataclass
class HeadingNode:
    level: int
    content: Union[str, "list[Node]"]

    type: ClassVar[str] = "heading"


@dataclass
class LinkNode:
    """Hyperlink. ``href`` is ``-`` for data-URL image holders."""

    href: str
    content: "list[Node]"

    type: ClassVar[str] = "link"


@dataclass
class ImageNode:
    src: str
    alt: Optional[str] = None

    type: ClassVar[str] = "image"


@dataclass
class VideoNode:
    src: str
    poster: Optional[str] = None
    controls: Optional[bool] = None

    type: ClassVar[str] = "video"


@dataclass
class ListItemNode:
    content: "list[Node]" = field(default_factory=list)

    type: ClassVar[str] = "listItem"


@dataclass
class ListNode:
    ordered: bool
    items: list[ListItemNode] = field(default_factory=list)

    type: ClassVar[str] = "list"


@dataclass
class TableCellNode:
    """
    Table cell.

    ``content`` is a plain (already escaped) string for pure-text cells and a
    node sequence otherwise. Span values of 1 are stored as ``None``.
    """

    content: Union[str, "list[Node]"]
    col_id: Optional[str] = None
    colspan: Optional[int] = None
    rowspan: Optional[int] = None

    type: ClassVar[str] = "tableCell"


@dataclass
class TableRowNode:
    cells: list[TableCellNode] = field(default_factory=list)

    type: ClassVar[str] = "tableRow"


@dataclass
class TableNode:
    rows: list[TableRowNode] = field(default_factory=list)
    col_ids: Optional[list[str]] = None

    type: ClassVar[str] = "table"


@dataclass
class CodeNode:
    content: str
    language: Optional[str] = None
    inline: bool = False

    type: ClassVar[str] = "code"


@dataclass
class BlockquoteNode:
    content: "list[Node]" = field(default_factory=list)

    type: ClassVar[str] = "blockquote"


@dataclass
class SemanticHtmlNode:
    """A document region (nav, header, section, ...) kept around its content."""

    html_type: str
    content: "list[Node]" = field(default_factory=list)

    type: ClassVar[str] = "semanticHtml"


@dataclass
class MetaContent:
    """
    Metadata scraped from ``<head>``.

    Attributes:
        standard: Plain ``<meta name=...>`` tags and the page title
        open_graph: ``og:*`` properties, prefix stripped
        twitter: ``twitter:*`` card tags, prefix stripped
        json_ld: Parsed JSON-LD objects in document order
    """

    standard: Optional[dict[str, str]] = None
    open_graph: Optional[dict[str, str]] = None
    twitter: Optional[dict[str, str]] = None
    json_ld: Optional[list[dict[str, Any]]] = None

    def is_empty(self) -> bool:
        return not (self.standard or self.open_graph or self.twitter or self.json_ld)


@dataclass
class MetaNode:
    content: MetaContent = field(default_factory=MetaContent)

    type: ClassVar[str] = "meta"


@dataclass
class CustomNode:
    """Caller-defined payload, rendered only through ``render_custom_node``."""

    content: Any = None

    type: ClassVar[str] = "custom"


Node = Union[
    TextNode,
    BoldNode,
    ItalicNode,
    StrikethroughNode,
    HeadingNode,
    LinkNode,
    ImageNode,
    VideoNode,
    ListNode,
    TableNode,
    CodeNode,
    BlockquoteNode,
    SemanticHtmlNode,
    MetaNode,
    CustomNode,
]

# Any node the walkers may meet, including list items and table parts
AnyNode = Union[Node, ListItemNode, TableRowNode, TableCellNode]


def iter_child_nodes(node: AnyNode) -> list[AnyNode]:
    """Return the direct child nodes of ``node`` in document order."""
    if isinstance(node, ListNode):
        return list(node.items)
    if isinstance(node, TableNode):
        return list(node.rows)
    if isinstance(node, TableRowNode):
        return list(node.cells)
    if isinstance(node, CustomNode):
        # Caller payload, opaque to the walkers
        return []
    content = getattr(node, "content", None)
    if isinstance(content, list):
        return list(content)
    return []
