"""Entry points for HTML and element conversion."""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup, Tag

from ..conversion.extractor import document_root, find_main_content
from ..conversion.markdown import markdown_ast_to_string
from ..conversion.parser import resolve_parser
from ..conversion.translator import html_to_markdown_ast
from ..conversion.urls import refify_urls
from ..models.config import ConversionOptions

logger = logging.getLogger(__name__)


def _build_options(options: ConversionOptions | None, overrides: dict[str, Any]) -> ConversionOptions:
    """Validate ``overrides`` on top of ``options``; the caller's object is never modified."""
    if options is None:
        return ConversionOptions(**overrides)
    if overrides:
        return ConversionOptions(**{**dict(options), **overrides})
    return options


def _bind_url_map(
    resolved: ConversionOptions,
    options: ConversionOptions | None,
    overrides: dict[str, Any],
) -> dict[str, str] | None:
    """
    Return the caller's URL map and attach it to ``resolved``.

    Validation copies dicts, so the map passed as a keyword, or the one on
    the caller's ``options``, is looked up and filled directly.
    """
    if not resolved.refify_urls:
        return None

    url_map = overrides.get("url_map")
    if url_map is None:
        owner = options if options is not None else resolved
        if owner.url_map is None:
            owner.url_map = {}
        url_map = owner.url_map
    resolved.url_map = url_map
    return url_map


def _has_head_content(document: BeautifulSoup) -> bool:
    head = document.find("head")
    return isinstance(head, Tag) and bool(head.decode_contents().strip())


def convert_html_to_markdown(
    html: str,
    options: ConversionOptions | None = None,
    **kwargs: Any,
) -> str:
    """
    Convert an HTML string to semantic Markdown.

    Args:
        html: HTML document or fragment
        options: Conversion options
        **kwargs: Option overrides passed to ConversionOptions

    Returns:
        Markdown string

    Raises:
        ConfigurationError: If no usable HTML parser is available
        ValidationError: If an override is not a valid option value

    Example:
        markdown = convert_html_to_markdown(
            html,
            extract_main_content=True,
            include_meta_data="extended",
            emit_front_matter=True,
        )
    """
    resolved = _build_options(options, kwargs)
    url_map = _bind_url_map(resolved, options, kwargs)
    parser = resolve_parser(resolved.parser, resolved.parser_features)
    document = parser.parse(html)

    if resolved.extract_main_content:
        element = find_main_content(document)
        if resolved.include_meta_data and _has_head_content(document) and element.find("head") is None:
            # Main content was extracted without the head; re-attach it for metadata
            logger.debug("Re-attaching <head> to the extracted main content")
            head = document.find("head")
            combined = parser.parse(f"<html>{head}{element}</html>")
            element = document_root(combined)
    elif resolved.include_meta_data and _has_head_content(document):
        element = document_root(document)
    else:
        body = document.find("body")
        element = body if isinstance(body, Tag) else document_root(document)

    return _convert_element(element, resolved, url_map)


def convert_element_to_markdown(
    element: Tag,
    options: ConversionOptions | None = None,
    **kwargs: Any,
) -> str:
    """
    Convert a parsed element's children to semantic Markdown.

    When ``refify_urls`` is enabled the URL references are added to the
    caller's map: the ``url_map`` keyword when given, else ``options.url_map``
    (created when missing).

    Args:
        element: Root element
        options: Conversion options
        **kwargs: Option overrides passed to ConversionOptions

    Returns:
        Markdown string

    Raises:
        ValidationError: If an override is not a valid option value
    """
    resolved = _build_options(options, kwargs)
    return _convert_element(element, resolved, _bind_url_map(resolved, options, kwargs))


def _convert_element(element: Tag, options: ConversionOptions, url_map: dict[str, str] | None) -> str:
    ast = html_to_markdown_ast(element, options)
    if url_map is not None:
        refify_urls(ast, url_map)
    markdown = markdown_ast_to_string(ast, options)
    logger.debug(f"Converted <{element.name}> to {len(markdown)} characters of Markdown")
    return markdown
