"""BeautifulSoup-backed document parsing."""

import logging
from typing import Optional

from bs4 import BeautifulSoup
from bs4.builder import builder_registry

from .protocols import DocumentParser

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when a conversion cannot start because of its configuration."""


class SoupParser:
    """
    Parses HTML with BeautifulSoup.

    Example:
        parser = SoupParser("lxml")
        document = parser.parse("<p>Hello</p>")
    """

    def __init__(self, features: str = "html.parser"):
        """
        Initialize the parser.

        Args:
            features: BeautifulSoup tree builder name (html.parser, lxml, html5lib)

        Raises:
            ConfigurationError: If no tree builder provides ``features``
        """
        if not is_parser_available(features):
            raise ConfigurationError(
                f"HTML parser '{features}' is not available. "
                "Install it or provide a parser in the conversion options."
            )
        self.features = features

    def parse(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html, self.features)


def is_parser_available(features: str) -> bool:
    """Check whether BeautifulSoup has a tree builder for ``features``."""
    return builder_registry.lookup(*features.split(",")) is not None


def resolve_parser(parser: Optional[DocumentParser] = None, features: str = "html.parser") -> DocumentParser:
    """
    Pick the parser for a conversion.

    Args:
        parser: Explicitly provided parser, used as is
        features: Tree builder for the default BeautifulSoup parser

    Returns:
        A usable DocumentParser

    Raises:
        ConfigurationError: If no parser was provided and the tree builder is missing
    """
    if parser is not None:
        return parser
    logger.debug(f"Using BeautifulSoup parser with features={features!r}")
    return SoupParser(features)
