"""Content conversion for semantic-markdown (DOM to AST, AST to Markdown)."""

from .ast_utils import find_all_in_ast, find_in_ast, get_main_content
from .dom import escape_markdown_characters, get_visible_text, is_element_visible
from .extractor import MainContentExtractor, calculate_score, find_main_content, wrap_main_content
from .markdown import FrontmatterBuilder, MarkdownRenderer, markdown_ast_to_string
from .metadata import MetaDataExtractor, extract_meta_data
from .parser import ConfigurationError, SoupParser, resolve_parser
from .protocols import DocumentParser
from .translator import TreeTranslator, html_to_markdown_ast
from .urls import refify_urls

__all__ = [
    # Protocols
    "DocumentParser",
    # Implementations
    "FrontmatterBuilder",
    "MainContentExtractor",
    "MarkdownRenderer",
    "MetaDataExtractor",
    "SoupParser",
    "TreeTranslator",
    # Functions
    "calculate_score",
    "escape_markdown_characters",
    "extract_meta_data",
    "find_all_in_ast",
    "find_in_ast",
    "find_main_content",
    "get_main_content",
    "get_visible_text",
    "html_to_markdown_ast",
    "is_element_visible",
    "markdown_ast_to_string",
    "refify_urls",
    "resolve_parser",
    "wrap_main_content",
    # Errors
    "ConfigurationError",
]
