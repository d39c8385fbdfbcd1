"""Main content detection for parsed HTML documents."""

import logging
import math
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .dom import (
    describe_element,
    get_class_list,
    get_text_content,
    get_visible_text,
    is_element,
)

logger = logging.getLogger(__name__)

# id/class values that usually mark the content container
HIGH_IMPACT_ATTRIBUTES = [
    "article",
    "content",
    "main-container",
    "main",
    "main-content",
]

HIGH_IMPACT_TAGS = {"article", "main", "section"}

MIN_CANDIDATE_SCORE = 20


def calculate_link_density(element: Tag) -> float:
    """Ratio of anchor text length to total text length."""
    link_length = sum(len(get_text_content(link)) for link in element.find_all("a"))
    text_length = len(get_text_content(element)) or 1
    return link_length / text_length


def calculate_score(element: Tag) -> int:
    """
    Score how likely ``element`` is to hold the page's main content.

    The score is purely additive and only looks at the element itself and
    its descendants.
    """
    score = 0
    score_log: list[str] = []

    element_id = element.get("id") or ""
    classes = get_class_list(element)
    for attr in HIGH_IMPACT_ATTRIBUTES:
        if attr in classes or attr in element_id:
            score += 10
            score_log.append(f"High impact attribute found: {attr}, score increased by 10")
            break

    if element.name in HIGH_IMPACT_TAGS:
        score += 5
        score_log.append(f"High impact tag found: {element.name}, score increased by 5")

    paragraph_count = len(element.find_all("p"))
    paragraph_score = min(paragraph_count, 5)
    if paragraph_score > 0:
        score += paragraph_score
        score_log.append(f"Paragraph count: {paragraph_count}, score increased by {paragraph_score}")

    text_length = len(get_visible_text(element))
    if text_length > 200:
        text_score = min(math.floor(text_length / 200), 5)
        score += text_score
        score_log.append(f"Text content length: {text_length}, score increased by {text_score}")

    link_density = calculate_link_density(element)
    if link_density < 0.3:
        score += 5
        score_log.append(f"Link density: {link_density:.2f}, score increased by 5")

    if element.has_attr("data-main") or element.has_attr("data-content"):
        score += 10
        score_log.append("Data attribute for main content found, score increased by 10")

    role = element.get("role")
    if isinstance(role, list):
        role = " ".join(role)
    if role and "main" in role:
        score += 10
        score_log.append("Role attribute indicating main content found, score increased by 10")

    if score_log and logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Scoring for {describe_element(element)}:")
        for line in score_log:
            logger.debug(f"  {line}")
        logger.debug(f"  Final score: {score}")

    return score


class MainContentExtractor:
    """
    Locates the element holding a page's primary content.

    An explicit ``<main>`` element always wins. Otherwise every element of
    the body is scored and the best candidate that is not nested inside
    another candidate is returned.

    Example:
        extractor = MainContentExtractor()
        element = extractor.find(BeautifulSoup(html, "html.parser"))
    """

    def __init__(self, min_score: int = MIN_CANDIDATE_SCORE):
        """
        Initialize the extractor.

        Args:
            min_score: Minimum score for an element to become a candidate
        """
        self._min_score = min_score

    def find(self, document: BeautifulSoup) -> Tag:
        """
        Find the main content element of ``document``.

        Args:
            document: Parsed document

        Returns:
            The main content element, the body, or the document root
        """
        logger.debug("Looking for main content")

        main_element = document.find("main")
        if isinstance(main_element, Tag):
            logger.debug("Existing <main> element found")
            return main_element

        logger.debug("No <main> element found. Detecting main content.")
        body = document.find("body")
        if not isinstance(body, Tag):
            logger.debug("No body element found, returning document root")
            return document_root(document)
        return self.detect(body)

    def detect(self, root: Tag) -> Tag:
        """Score the subtree under ``root`` and pick the best independent candidate."""
        candidates: list[tuple[int, Tag]] = []
        self._collect_candidates(root, candidates)
        logger.debug(f"Total candidates found: {len(candidates)}")

        if not candidates:
            logger.debug("No suitable candidates found, returning root element")
            return root

        # Stable sort keeps document order between equal scores
        candidates.sort(key=lambda candidate: candidate[0], reverse=True)
        elements = [element for _, element in candidates]

        for score, element in candidates:
            if not any(other is not element and _contains(other, element) for other in elements):
                logger.debug(f"Final main content candidate: {describe_element(element)} (score {score})")
                return element

        return candidates[0][1]

    def _collect_candidates(self, element: Tag, candidates: list[tuple[int, Tag]]) -> None:
        score = calculate_score(element)
        if score >= self._min_score:
            candidates.append((score, element))
            logger.debug(f"Candidate found: {describe_element(element)}, score: {score}")

        for child in element.children:
            if is_element(child):
                self._collect_candidates(child, candidates)


def _contains(ancestor: Tag, element: Tag) -> bool:
    return any(parent is ancestor for parent in element.parents)


def document_root(document: BeautifulSoup) -> Tag:
    """Return the ``<html>`` element, or the document itself for fragments."""
    html = document.find("html")
    return html if isinstance(html, Tag) else document


def find_main_content(document: BeautifulSoup) -> Tag:
    """Find the element containing the main content of ``document``."""
    return MainContentExtractor().find(document)


def wrap_main_content(main_content: Tag, document: BeautifulSoup) -> Optional[Tag]:
    """
    Wrap ``main_content`` in a ``<main id="detected-main-content">`` element.

    The document is modified in place. Nothing happens when the element
    already is a ``<main>``.

    Returns:
        The new wrapper, or None when no wrapping was needed
    """
    if main_content.name == "main":
        logger.debug("Main content already wrapped")
        return None

    logger.debug("Wrapping main content in <main> element")
    wrapper = document.new_tag("main", id="detected-main-content")
    main_content.wrap(wrapper)
    return wrapper
