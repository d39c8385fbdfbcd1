"""DOM helpers shared by the locator and the translator."""

import re
from typing import Optional

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

# Backslash-escaped in extracted text
MARKDOWN_SPECIAL_CHARS = re.compile(r"([\\`*_{}\[\]#+!|])")

# Tags whose text never reaches the screen
NON_VISUAL_TAGS = {"script", "style", "noscript", "template"}

_STYLE_DECLARATION = re.compile(r"([\w-]+)\s*:\s*([^;]+)")


def is_text_node(node) -> bool:
    """True for character data, False for comments, doctypes and CDATA."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_element(node) -> bool:
    return isinstance(node, Tag)


def escape_markdown_characters(text: Optional[str], is_inline_code: bool = False) -> str:
    """
    Escape text for Markdown output.

    HTML special characters become entities (``&`` first), then Markdown
    control characters are backslash-escaped. Inline code and
    whitespace-only text are returned untouched.

    Args:
        text: Text to escape
        is_inline_code: Whether the text is inline code

    Returns:
        Escaped text
    """
    if text is None:
        return ""
    if is_inline_code or not text.strip():
        return text

    escaped = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    return MARKDOWN_SPECIAL_CHARS.sub(r"\\\1", escaped)


def parse_inline_style(element: Tag) -> dict[str, str]:
    """Parse an element's ``style`` attribute into lowercase declarations."""
    style = element.get("style")
    if not style:
        return {}
    if isinstance(style, list):
        style = " ".join(style)
    return {
        name.strip().lower(): value.replace("!important", "").strip().lower()
        for name, value in _STYLE_DECLARATION.findall(style)
    }


def is_element_visible(element: Tag) -> bool:
    """
    Guess whether an element is rendered.

    Without a layout engine only the ``hidden`` attribute and inline
    ``display``/``visibility``/``opacity`` declarations are considered.
    """
    if element.has_attr("hidden"):
        return False

    style = parse_inline_style(element)
    if style.get("display") == "none":
        return False
    if style.get("visibility") == "hidden":
        return False
    opacity = style.get("opacity")
    if opacity is not None:
        try:
            if float(opacity) == 0:
                return False
        except ValueError:
            pass
    return True


def get_visible_text(element: Tag) -> str:
    """Concatenate text from visible descendants of ``element``, trimmed."""
    if not is_element_visible(element):
        return ""

    parts: list[str] = []
    for child in element.children:
        if is_text_node(child):
            parts.append(str(child))
        elif is_element(child) and child.name not in NON_VISUAL_TAGS:
            parts.append(get_visible_text(child))
    return "".join(parts).strip()


def get_text_content(element: Tag) -> str:
    """Equivalent of the DOM ``textContent``: all descendant character data."""
    return "".join(str(s) for s in element.descendants if is_text_node(s))


def get_class_list(element: Tag) -> list[str]:
    classes = element.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def describe_element(element: Optional[Tag]) -> str:
    """Short ``tag#id.class`` descriptor used in log messages."""
    if element is None:
        return "No element"
    element_id = element.get("id") or "no-id"
    return f"{element.name}#{element_id}.{'.'.join(get_class_list(element))}"


def parse_span(value) -> int:
    """Parse a colspan/rowspan attribute, defaulting to 1."""
    if value is None:
        return 1
    match = re.match(r"\s*(\d+)", str(value))
    if not match:
        return 1
    return max(int(match.group(1)), 1)
