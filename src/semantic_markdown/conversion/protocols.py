"""Protocol definitions for document parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from bs4 import BeautifulSoup


class DocumentParser(Protocol):
    """
    Protocol for turning an HTML string into a document tree.

    Implementations return a BeautifulSoup document; the translator only
    relies on the ``Tag``/``NavigableString`` API.
    """

    def parse(self, html: str) -> BeautifulSoup:
        """
        Parse HTML into a document.

        Args:
            html: Raw HTML string

        Returns:
            Parsed document tree
        """
        ...
