"""Metadata extraction from the document ``<head>``."""

import json
import logging
from typing import Any, Literal

from bs4 import Tag

from ..models.nodes import MetaContent
from .dom import escape_markdown_characters, get_text_content

logger = logging.getLogger(__name__)

# <meta name=...> values that say nothing about the page itself
NON_SEMANTIC_TAG_NAMES = {"viewport", "referrer", "Content-Security-Policy"}


class MetaDataExtractor:
    """
    Extract title, meta tags, Open Graph, Twitter Card and JSON-LD data.

    In ``basic`` mode only the title and plain ``<meta name=...>`` tags are
    collected. ``extended`` adds ``og:*`` properties, ``twitter:*`` tags
    and every JSON-LD script of the document.

    Example:
        extractor = MetaDataExtractor(mode="extended")
        meta = extractor.extract(soup.head)
    """

    def __init__(self, mode: Literal["basic", "extended"] = "basic") -> None:
        """Initialize the extractor.

        Args:
            mode: Extraction mode, 'basic' or 'extended'
        """
        self.mode = mode

    def extract(self, head: Tag) -> MetaContent:
        """Extract metadata from a ``<head>`` element.

        Args:
            head: The head element

        Returns:
            Collected metadata; sections without data stay None
        """
        content = MetaContent()

        for title in head.find_all("title"):
            self._set(content, "standard", "title", escape_markdown_characters(get_text_content(title)))

        for meta_tag in head.find_all("meta"):
            value = self._safe_string(meta_tag.get("content"))
            if not value:
                continue

            prop = self._safe_string(meta_tag.get("property"))
            name = self._safe_string(meta_tag.get("name"))

            if prop.startswith("og:"):
                if self.mode == "extended":
                    self._set(content, "open_graph", prop[3:], value)
            elif name.startswith("twitter:"):
                if self.mode == "extended":
                    self._set(content, "twitter", name[8:], value)
            elif name and name not in NON_SEMANTIC_TAG_NAMES:
                self._set(content, "standard", name, value)

        if self.mode == "extended":
            json_ld = self._extract_jsonld(head)
            if json_ld:
                content.json_ld = json_ld

        return content

    def _extract_jsonld(self, head: Tag) -> list[dict[str, Any]]:
        """Parse every JSON-LD script in the document containing ``head``.

        Scripts that are not valid JSON are logged and skipped.
        """
        root = head
        for parent in head.parents:
            root = parent

        result: list[dict[str, Any]] = []
        for script in root.find_all("script", attrs={"type": "application/ld+json"}):
            text = get_text_content(script)
            if not text.strip():
                continue
            try:
                parsed = json.loads(text)
            except ValueError as e:
                logger.warning(f"Failed to parse JSON-LD: {e}")
                continue

            items = parsed if isinstance(parsed, list) else [parsed]
            result.extend(item for item in items if isinstance(item, dict))

        return result

    def _set(self, content: MetaContent, section: str, key: str, value: str) -> None:
        values = getattr(content, section)
        if values is None:
            values = {}
            setattr(content, section, values)
        values[key] = value

    def _safe_string(self, value: Any) -> str:
        """Safely convert an attribute value to string.

        Args:
            value: Attribute value (str, list for multi-valued attributes, or None)

        Returns:
            String value or empty string
        """
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return " ".join(str(v) for v in value)
        return str(value)


def extract_meta_data(head: Tag, mode: Literal["basic", "extended"] = "basic") -> MetaContent:
    """Extract metadata from ``head`` in the given mode."""
    return MetaDataExtractor(mode).extract(head)
