"""
semantic-markdown - Convert HTML into token-efficient, semantic Markdown.

Usage:
    from semantic_markdown import ConversionOptions, convert_html_to_markdown

    options = ConversionOptions(
        extract_main_content=True,
        include_meta_data="extended",
        emit_front_matter=True,
    )
    markdown = convert_html_to_markdown(html, options)
"""

from typing import Callable, Optional, Union

__version__ = "2.0.1"

from .conversion import (
    ConfigurationError,
    DocumentParser,
    FrontmatterBuilder,
    MainContentExtractor,
    MarkdownRenderer,
    SoupParser,
    TreeTranslator,
    extract_meta_data,
    find_all_in_ast,
    find_in_ast,
    find_main_content,
    get_main_content,
    html_to_markdown_ast,
    markdown_ast_to_string,
    refify_urls,
    wrap_main_content,
)
from .core.converter import convert_element_to_markdown, convert_html_to_markdown
from .logging_config import setup_logging
from .models.config import ConversionOptions
from .models.nodes import AnyNode, MetaContent, Node


def find_in_markdown_ast(
    ast: Union[AnyNode, list[AnyNode]],
    predicate: Callable[[AnyNode], bool],
) -> Optional[AnyNode]:
    """Find the first node in the Markdown AST that matches ``predicate``."""
    return find_in_ast(ast, predicate)


def find_all_in_markdown_ast(
    ast: Union[AnyNode, list[AnyNode]],
    predicate: Callable[[AnyNode], bool],
) -> list[AnyNode]:
    """Find all nodes in the Markdown AST that match ``predicate``."""
    return find_all_in_ast(ast, predicate)


__all__ = [
    "__version__",
    # Core
    "convert_html_to_markdown",
    "convert_element_to_markdown",
    # Config
    "ConversionOptions",
    "ConfigurationError",
    # Pipeline stages
    "html_to_markdown_ast",
    "markdown_ast_to_string",
    "refify_urls",
    "find_main_content",
    "wrap_main_content",
    "extract_meta_data",
    # AST
    "Node",
    "MetaContent",
    "find_in_markdown_ast",
    "find_all_in_markdown_ast",
    "get_main_content",
    # Classes
    "DocumentParser",
    "FrontmatterBuilder",
    "MainContentExtractor",
    "MarkdownRenderer",
    "SoupParser",
    "TreeTranslator",
    # Logging
    "setup_logging",
]
