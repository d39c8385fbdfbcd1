"""Semantic Markdown AST to Markdown rendering."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Optional, Union
from urllib.parse import quote

from ..models.config import ConversionOptions
from ..models.nodes import (
    BlockquoteNode,
    CodeNode,
    CustomNode,
    HeadingNode,
    ImageNode,
    LinkNode,
    ListNode,
    MetaContent,
    MetaNode,
    Node,
    SemanticHtmlNode,
    TableNode,
    VideoNode,
)
from .ast_utils import find_in_ast

logger = logging.getLogger(__name__)

# Characters left alone by JavaScript's encodeURI
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"

_PUNCTUATION = re.compile(r"[.,!?;:]")

INLINE_WRAPPERS = {
    "bold": "**",
    "italic": "*",
    "strikethrough": "~~",
}

# Regions rendered as <-type-> ... </-type-> markers
MARKED_REGIONS = {
    "aside",
    "details",
    "figcaption",
    "figure",
    "footer",
    "header",
    "main",
    "mark",
    "nav",
    "summary",
    "time",
}


def json_stringify(value: Any) -> str:
    """Compact JSON encoding, non-ASCII kept as is."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def encode_uri(url: str) -> str:
    return quote(url, safe=_URI_SAFE)


def _is_whitespace(char: str) -> bool:
    return bool(char) and char.isspace()


def _schema_type_label(schema_type: Any) -> str:
    """Label for a JSON-LD ``@type``; lists are comma-joined."""
    if schema_type is None:
        return "(unknown type)"
    if isinstance(schema_type, list):
        return ",".join(str(value) for value in schema_type)
    return str(schema_type)


class FrontmatterBuilder:
    """
    Builds YAML-style front matter from extracted metadata.

    Example:
        builder = FrontmatterBuilder()
        frontmatter = builder.build(MetaContent(standard={"title": "Getting Started"}))
    """

    def build(self, meta: Optional[MetaContent]) -> str:
        """
        Build the front matter block.

        Args:
            meta: Metadata from the document head

        Returns:
            Front matter with ``---`` delimiters, or an empty string when
            there is nothing to emit
        """
        if meta is None or meta.is_empty():
            return ""

        lines: list[str] = []

        if meta.standard:
            for key, value in meta.standard.items():
                lines.append(f"{key}: {json_stringify(value)}")

        if meta.open_graph:
            lines.append("openGraph:")
            for key, value in meta.open_graph.items():
                lines.append(f"  {key}: {json_stringify(value)}")

        if meta.twitter:
            lines.append("twitter:")
            for key, value in meta.twitter.items():
                lines.append(f"  {key}: {json_stringify(value)}")

        if meta.json_ld:
            lines.append("schema:")
            for item in meta.json_ld:
                lines.append(f"  {_schema_type_label(item.get('@type'))}:")
                for key, value in item.items():
                    if key in ("@context", "@type"):
                        continue
                    lines.append(f"    {key}: {json_stringify(value)}")

        return "---\n" + "\n".join(lines) + "\n---\n\n"


class MarkdownRenderer:
    """
    Renders semantic Markdown AST nodes to a Markdown string.

    Example:
        renderer = MarkdownRenderer(ConversionOptions(emit_front_matter=True))
        markdown = renderer.render(nodes)
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        """
        Initialize the renderer.

        Args:
            options: Conversion options (defaults if None)
        """
        self.options = options or ConversionOptions()
        self._frontmatter_builder = FrontmatterBuilder()

        self._renderers: dict[str, Callable[[Any, str, int], str]] = {
            "text": self._render_inline,
            "bold": self._render_inline,
            "italic": self._render_inline,
            "strikethrough": self._render_inline,
            "link": self._render_inline,
            "heading": self._render_heading,
            "image": self._render_image,
            "list": self._render_list,
            "video": self._render_video,
            "table": self._render_table,
            "code": self._render_code,
            "blockquote": self._render_blockquote,
            "meta": self._render_meta,
            "semanticHtml": self._render_semantic_html,
            "custom": self._render_custom,
        }

    def render(self, nodes: list[Node], indent_level: int = 0) -> str:
        """
        Render front matter (when enabled) followed by the body.

        Args:
            nodes: AST nodes
            indent_level: Starting indentation level

        Returns:
            Markdown string
        """
        return self.render_front_matter(nodes) + self.render_content(nodes, indent_level)

    def render_front_matter(self, nodes: list[Node]) -> str:
        if not self.options.emit_front_matter:
            return ""
        node = find_in_ast(nodes, lambda n: n.type == "meta")
        if not isinstance(node, MetaNode):
            return ""
        return self._frontmatter_builder.build(node.content)

    def render_content(self, nodes: list[Node], indent_level: int = 0) -> str:
        """Render the body of ``nodes`` without front matter."""
        output = ""

        for node in nodes:
            override = self.options.override_node_renderer
            if override is not None:
                rendered = override(node, self.options, indent_level)
                if rendered is not None:
                    output += rendered
                    continue

            renderer = self._renderers.get(node.type)
            if renderer is None:
                logger.debug(f"No renderer for node type '{node.type}'")
                continue
            output += renderer(node, output, indent_level)

        return output

    def _content_string(self, content: Union[str, list[Node]], indent_level: int) -> str:
        if isinstance(content, list):
            return self.render_content(content, indent_level)
        return content

    def _render_inline(self, node: Any, output: str, indent_level: int) -> str:
        content = self._content_string(node.content, indent_level)

        piece = ""
        if (
            output
            and not _PUNCTUATION.fullmatch(content)
            and not _is_whitespace(content[:1])
            and not _is_whitespace(output[-1:])
        ):
            piece = " "

        if node.type == "text":
            return piece + "  " * indent_level + content

        if isinstance(node, LinkNode):
            if len(node.content) == 1 and node.content[0].type == "text":
                return piece + f"[{content}]({encode_uri(node.href)})"
            return piece + f'<a href="{node.href}">{content}</a>'

        wrapper = INLINE_WRAPPERS[node.type]
        return piece + f"{wrapper}{content}{wrapper}"

    def _render_heading(self, node: HeadingNode, output: str, indent_level: int) -> str:
        prefix = "" if output.endswith("\n") else "\n"
        content = self._content_string(node.content, indent_level)
        return f"{prefix}{'#' * node.level} {content}\n\n"

    def _render_image(self, node: ImageNode, output: str, indent_level: int) -> str:
        # Alt text without a source is dropped
        if not (node.alt or "").strip() or (node.src or "").strip():
            return f"![{node.alt or ''}]({node.src})"
        return ""

    def _render_list(self, node: ListNode, output: str, indent_level: int) -> str:
        indent = "  " * indent_level
        piece = ""
        for index, item in enumerate(node.items):
            prefix = f"{index + 1}." if node.ordered else "-"
            contents = self.render_content(item.content, indent_level + 1).strip()
            if not (piece or output).endswith("\n"):
                piece += "\n"
            if contents:
                piece += f"{indent}{prefix} {contents}\n"
        return piece + "\n"

    def _render_video(self, node: VideoNode, output: str, indent_level: int) -> str:
        piece = f"\n![Video]({node.src})\n"
        if node.poster:
            piece += f"![Poster]({node.poster})\n"
        if node.controls:
            piece += f"Controls: {str(node.controls).lower()}\n"
        return piece + "\n"

    def _render_table(self, node: TableNode, output: str, indent_level: int) -> str:
        max_columns = max(
            (sum(cell.colspan or 1 for cell in row.cells) for row in node.rows),
            default=0,
        )

        piece = ""
        for row in node.rows:
            current_column = 0
            for cell in row.cells:
                if isinstance(cell.content, list):
                    cell_content = self.render_content(cell.content, indent_level + 1).strip()
                else:
                    cell_content = cell.content

                if cell.col_id:
                    cell_content += f" <!-- {cell.col_id} -->"
                if cell.colspan and cell.colspan > 1:
                    cell_content += f" <!-- colspan: {cell.colspan} -->"
                if cell.rowspan and cell.rowspan > 1:
                    cell_content += f" <!-- rowspan: {cell.rowspan} -->"

                piece += f"| {cell_content} "
                span = cell.colspan or 1
                current_column += span
                piece += "| " * (span - 1)

            while current_column < max_columns:
                piece += "|  "
                current_column += 1

            piece += "|\n"
        return piece + "\n"

    def _render_code(self, node: CodeNode, output: str, indent_level: int) -> str:
        if node.inline:
            prefix = "" if _is_whitespace(output[-1:]) else " "
            return f"{prefix}`{node.content}`"
        return f"\n```{node.language or ''}\n{node.content}\n```\n\n"

    def _render_blockquote(self, node: BlockquoteNode, output: str, indent_level: int) -> str:
        return f"> {self.render_content(node.content).strip()}\n\n"

    def _render_meta(self, node: MetaNode, output: str, indent_level: int) -> str:
        # Emitted as front matter
        return ""

    def _render_semantic_html(self, node: SemanticHtmlNode, output: str, indent_level: int) -> str:
        content = self.render_content(node.content)
        if node.html_type == "article":
            return "\n\n" + content
        if node.html_type == "section":
            return f"---\n\n{content}\n\n---\n\n"
        if node.html_type in MARKED_REGIONS:
            return f"\n\n<-{node.html_type}->\n{content}\n\n</-{node.html_type}->\n"
        return content

    def _render_custom(self, node: CustomNode, output: str, indent_level: int) -> str:
        hook = self.options.render_custom_node
        if hook is None:
            return ""
        return hook(node, self.options, indent_level) or ""


def markdown_ast_to_string(
    nodes: list[Node],
    options: Optional[ConversionOptions] = None,
    indent_level: int = 0,
) -> str:
    """Render AST nodes to Markdown, front matter included when enabled."""
    return MarkdownRenderer(options).render(nodes, indent_level)
