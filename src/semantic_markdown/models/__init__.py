"""Semantic Markdown AST and configuration models."""

from .config import ConversionOptions, MetaDataMode
from .nodes import (
    SEMANTIC_HTML_TYPES,
    AnyNode,
    BlockquoteNode,
    BoldNode,
    CodeNode,
    CustomNode,
    HeadingNode,
    ImageNode,
    ItalicNode,
    LinkNode,
    ListItemNode,
    ListNode,
    MetaContent,
    MetaNode,
    Node,
    SemanticHtmlNode,
    StrikethroughNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    TextNode,
    VideoNode,
    iter_child_nodes,
)

__all__ = [
    # Config
    "ConversionOptions",
    "MetaDataMode",
    # Nodes
    "AnyNode",
    "BlockquoteNode",
    "BoldNode",
    "CodeNode",
    "CustomNode",
    "HeadingNode",
    "ImageNode",
    "ItalicNode",
    "LinkNode",
    "ListItemNode",
    "ListNode",
    "MetaContent",
    "MetaNode",
    "Node",
    "SEMANTIC_HTML_TYPES",
    "SemanticHtmlNode",
    "StrikethroughNode",
    "TableCellNode",
    "TableNode",
    "TableRowNode",
    "TextNode",
    "VideoNode",
    "iter_child_nodes",
]
