"""Translation of a DOM subtree into the semantic Markdown AST."""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional
from urllib.parse import urljoin

from bs4 import Tag

from ..models.config import ConversionOptions
from ..models.nodes import (
    SEMANTIC_HTML_TYPES,
    BlockquoteNode,
    BoldNode,
    CodeNode,
    HeadingNode,
    ImageNode,
    ItalicNode,
    LinkNode,
    ListItemNode,
    ListNode,
    MetaNode,
    Node,
    SemanticHtmlNode,
    StrikethroughNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    TextNode,
    VideoNode,
)
from .dom import (
    escape_markdown_characters,
    get_class_list,
    get_text_content,
    is_element,
    is_element_visible,
    is_text_node,
    parse_span,
)
from .metadata import extract_meta_data

logger = logging.getLogger(__name__)

# Tags that produce nothing, children included
IGNORED_TAGS = ("script", "style", "noscript", "html", "template")

SHADOW_ROOT_ATTRIBUTES = ("shadowrootmode", "shadowroot")

HEADING_TAG = re.compile(r"^h([1-6])$")

Handler = Callable[[Tag, int], list[Node]]


def _paragraph_break() -> TextNode:
    return TextNode("\n\n")


def is_shadow_root(element: Tag) -> bool:
    """True for a declarative shadow root (``<template shadowrootmode>``)."""
    return element.name == "template" and any(element.has_attr(attr) for attr in SHADOW_ROOT_ATTRIBUTES)


def get_shadow_root(element: Tag) -> Optional[Tag]:
    for child in element.children:
        if is_element(child) and is_shadow_root(child):
            return child
    return None


class TreeTranslator:
    """
    Converts DOM elements into semantic Markdown AST nodes.

    Elements are dispatched on their tag name to a handler; tags without a
    handler go to the ``process_unhandled_element`` hook and are otherwise
    treated as transparent containers.

    Example:
        translator = TreeTranslator(ConversionOptions(enable_table_column_tracking=True))
        nodes = translator.translate(soup.body)
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        """
        Initialize the translator.

        Args:
            options: Conversion options (defaults if None)
        """
        self.options = options or ConversionOptions()
        self._excluded_tags = self.options.excluded_tags

        self._handlers: dict[str, Handler] = {
            "p": self._paragraph,
            "a": self._anchor,
            "img": self._image,
            "video": self._video,
            "ul": self._list,
            "ol": self._list,
            "br": self._line_break,
            "hr": self._horizontal_rule,
            "table": self._table,
            "strong": self._bold,
            "b": self._bold,
            "em": self._italic,
            "i": self._italic,
            "s": self._strikethrough,
            "strike": self._strikethrough,
            "code": self._code,
            "blockquote": self._blockquote,
        }
        for level in range(1, 7):
            self._handlers[f"h{level}"] = self._heading
        for tag_name in SEMANTIC_HTML_TYPES:
            self._handlers[tag_name] = self._semantic_html
        for tag_name in IGNORED_TAGS:
            self._handlers[tag_name] = self._ignore

    def translate(self, element: Tag, indent_level: int = 0) -> list[Node]:
        """
        Translate the children of ``element``.

        A declarative shadow root, when present, replaces the light children.

        Args:
            element: Root element (not itself translated)
            indent_level: Nesting level passed to hooks

        Returns:
            AST nodes in document order
        """
        result: list[Node] = []
        container = get_shadow_root(element) or element
        for child in list(container.children):
            self._process_child(child, result, indent_level)
        return result

    def _process_child(self, child, result: list[Node], indent_level: int) -> None:
        if is_text_node(child):
            text = escape_markdown_characters(str(child).strip())
            if text:
                logger.debug(f"Text Node: '{text}'")
                result.append(TextNode(text))
            return

        if not is_element(child):
            return

        if child.name == "slot":
            for assigned in self._assigned_nodes(child):
                self._process_child(assigned, result, indent_level)
            return

        override = self.options.override_element_processing
        if override is not None:
            overridden = override(child, self.options, indent_level)
            if overridden is not None:
                logger.debug(f"Element Processing Overridden: '{child.name}'")
                result.extend(overridden or [])
                return

        tag_name = child.name.lower()
        if tag_name in self._excluded_tags:
            return

        if tag_name == "head" and self.options.include_meta_data:
            meta = extract_meta_data(child, self.options.include_meta_data)
            result.append(MetaNode(meta))
            return

        if self.options.exclude_invisible_elements and not is_element_visible(child):
            logger.debug(f"Skipping invisible element: '{tag_name}'")
            return

        handler = self._handlers.get(tag_name)
        if handler is not None:
            result.extend(handler(child, indent_level))
        else:
            result.extend(self._unhandled(child, indent_level))

    def _assigned_nodes(self, slot: Tag) -> list:
        """Nodes distributed into ``slot``, or its fallback content."""
        host = None
        for parent in slot.parents:
            if is_element(parent) and is_shadow_root(parent):
                host = parent.parent
                break

        if host is not None:
            name = slot.get("name")
            assigned = []
            for node in host.children:
                if is_element(node):
                    if is_shadow_root(node):
                        continue
                    if (node.get("slot") or None) == (name or None):
                        assigned.append(node)
                elif is_text_node(node) and not name:
                    assigned.append(node)
            if any(is_element(node) or str(node).strip() for node in assigned):
                return assigned

        return list(slot.children)

    def _resolve_url(self, url: str) -> str:
        """Resolve against ``base_url`` and strip ``website_domain``."""
        if self.options.base_url and not url.startswith(("data:", "#")):
            url = urljoin(self.options.base_url, url)
        domain = self.options.website_domain
        if domain and url.startswith(domain):
            url = url[len(domain):]
        return url

    # Handlers

    def _heading(self, element: Tag, indent_level: int) -> list[Node]:
        level = int(HEADING_TAG.match(element.name.lower()).group(1))
        logger.debug(f"Heading {level}")
        return [HeadingNode(level=level, content=self.translate(element))]

    def _paragraph(self, element: Tag, indent_level: int) -> list[Node]:
        logger.debug("Paragraph")
        content = self.translate(element)
        if not content:
            return []
        return [*content, _paragraph_break()]

    def _anchor(self, element: Tag, indent_level: int) -> list[Node]:
        href = element.get("href") or ""
        logger.debug(f"Link: '{href}' with text '{get_text_content(element)}'")

        if href.startswith("data:image"):
            content = self.translate(element)
            return [LinkNode(href="-", content=content)] if content else []

        href = self._resolve_url(href)
        if all(is_text_node(node) for node in element.children):
            text = get_text_content(element).strip()
            if not text:
                return []
            return [LinkNode(href=href, content=[TextNode(text)])]

        content = self.translate(element)
        if not content:
            return []
        return [LinkNode(href=href, content=content)]

    def _image(self, element: Tag, indent_level: int) -> list[Node]:
        src = element.get("src") or ""
        alt = element.get("alt")
        logger.debug(f"Image: src='{src}', alt='{alt}'")

        src = "-" if src.startswith("data:image") else self._resolve_url(src)
        return [ImageNode(src=src, alt=escape_markdown_characters(alt) if alt is not None else None)]

    def _video(self, element: Tag, indent_level: int) -> list[Node]:
        src = element.get("src")
        if not src:
            source = element.find("source", src=True)
            src = source.get("src") if source is not None else ""
        poster = element.get("poster")
        controls = element.has_attr("controls")
        logger.debug(f"Video: src='{src}', poster='{poster}', controls='{controls}'")

        src = "-" if src.startswith("data:image") else self._resolve_url(src)
        return [
            VideoNode(
                src=src,
                poster=escape_markdown_characters(poster) if poster else None,
                controls=controls or None,
            )
        ]

    def _list(self, element: Tag, indent_level: int) -> list[Node]:
        ordered = element.name.lower() == "ol"
        logger.debug(f"{'Ordered' if ordered else 'Unordered'} List")
        items = [
            ListItemNode(content=self.translate(item, indent_level + 1))
            for item in element.children
            if is_element(item)
        ]
        return [ListNode(ordered=ordered, items=items)]

    def _line_break(self, element: Tag, indent_level: int) -> list[Node]:
        logger.debug("Line Break")
        return [TextNode("\n")]

    def _horizontal_rule(self, element: Tag, indent_level: int) -> list[Node]:
        logger.debug("Horizontal Rule")
        return [_paragraph_break()]

    def _table(self, element: Tag, indent_level: int) -> list[Node]:
        logger.debug("Table")
        rows = [row for row in element.find_all("tr") if row.find_parent("table") is element]

        col_ids: list[str] = []
        if self.options.enable_table_column_tracking and rows:
            width = sum(parse_span(cell.get("colspan")) for cell in _row_cells(rows[0]))
            col_ids = [f"col-{index}" for index in range(width)]

        table_rows: list[TableRowNode] = []
        for row in rows:
            column_index = 0
            cells: list[TableCellNode] = []
            for cell in _row_cells(row):
                colspan = parse_span(cell.get("colspan"))
                rowspan = parse_span(cell.get("rowspan"))
                if all(is_text_node(node) for node in cell.children):
                    content = escape_markdown_characters(get_text_content(cell).strip())
                else:
                    content = self.translate(cell, indent_level + 1)
                cells.append(
                    TableCellNode(
                        content=content,
                        col_id=col_ids[column_index] if column_index < len(col_ids) else None,
                        colspan=colspan if colspan > 1 else None,
                        rowspan=rowspan if rowspan > 1 else None,
                    )
                )
                column_index += colspan
            table_rows.append(TableRowNode(cells=cells))

        if rows and rows[0].find(["th"], recursive=False) is not None:
            separator = TableRowNode(cells=[TableCellNode(content="---") for _ in _row_cells(rows[0])])
            table_rows.insert(1, separator)

        return [TableNode(rows=table_rows, col_ids=col_ids)]

    def _formatting(self, element: Tag, indent_level: int, node_type: type) -> list[Node]:
        if not get_text_content(element).strip():
            return []
        logger.debug(f"{node_type.type.capitalize()}: '{get_text_content(element)}'")
        return [node_type(content=self.translate(element, indent_level + 1))]

    def _bold(self, element: Tag, indent_level: int) -> list[Node]:
        return self._formatting(element, indent_level, BoldNode)

    def _italic(self, element: Tag, indent_level: int) -> list[Node]:
        return self._formatting(element, indent_level, ItalicNode)

    def _strikethrough(self, element: Tag, indent_level: int) -> list[Node]:
        return self._formatting(element, indent_level, StrikethroughNode)

    def _code(self, element: Tag, indent_level: int) -> list[Node]:
        text = get_text_content(element)
        if not text.strip():
            return []

        is_code_block = element.parent is not None and (element.parent.name or "").lower() == "pre"
        logger.debug(f"{'Code Block' if is_code_block else 'Inline Code'}: '{text}'")

        language = None
        for cls in get_class_list(element):
            if cls.startswith("language-"):
                language = cls[len("language-"):]
                break

        content = text.strip("\r\n") if is_code_block else text.strip()
        return [CodeNode(content=content, language=language, inline=not is_code_block)]

    def _blockquote(self, element: Tag, indent_level: int) -> list[Node]:
        logger.debug("Blockquote")
        return [BlockquoteNode(content=self.translate(element))]

    def _semantic_html(self, element: Tag, indent_level: int) -> list[Node]:
        logger.debug(f"Semantic HTML Element: '{element.name}'")
        return [SemanticHtmlNode(html_type=element.name.lower(), content=self.translate(element))]

    def _ignore(self, element: Tag, indent_level: int) -> list[Node]:
        return []

    def _unhandled(self, element: Tag, indent_level: int) -> list[Node]:
        hook = self.options.process_unhandled_element
        if hook is not None:
            processed = hook(element, self.options, indent_level)
            if processed:
                logger.debug(f"Processing Unhandled Element: '{element.name}'")
                return list(processed)

        logger.debug(f"Generic HTMLElement: '{element.name}'")
        return self.translate(element, indent_level + 1)


def _row_cells(row: Tag) -> list[Tag]:
    return [cell for cell in row.find_all(["th", "td"], recursive=False)]


def html_to_markdown_ast(
    element: Tag,
    options: Optional[ConversionOptions] = None,
    indent_level: int = 0,
) -> list[Node]:
    """Translate the children of ``element`` into semantic Markdown AST nodes."""
    return TreeTranslator(options).translate(element, indent_level)
