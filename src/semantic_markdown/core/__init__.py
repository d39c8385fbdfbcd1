"""Conversion entry points."""

from .converter import convert_element_to_markdown, convert_html_to_markdown

__all__ = [
    "convert_element_to_markdown",
    "convert_html_to_markdown",
]
