"""Replacement of long URLs with short reference tokens."""

import logging
from typing import Union

from ..models.nodes import AnyNode, ImageNode, LinkNode, VideoNode, iter_child_nodes

logger = logging.getLogger(__name__)

MEDIA_SUFFIXES = {
    "jpeg", "jpg", "png", "gif", "bmp", "tiff", "tif", "svg", "webp", "ico",
    "avi", "mov", "mp4", "mkv", "flv", "wmv", "webm", "mpeg", "mpg",
    "mp3", "wav", "aac", "ogg", "flac", "m4a",
    "pdf", "doc", "docx", "ppt", "pptx", "xls", "xlsx", "txt",
    "css", "js", "xml", "json", "html", "htm",
}  # fmt: skip


def add_ref_prefix(prefix: str, url_map: dict[str, str]) -> str:
    """Return the token for ``prefix``, assigning ``refN`` on first use."""
    if prefix not in url_map:
        url_map[prefix] = f"ref{len(url_map)}"
        logger.debug(f"Assigned {url_map[prefix]} to {prefix}")
    return url_map[prefix]


def process_url(url: str, url_map: dict[str, str]) -> str:
    """
    Shorten a single URL.

    Media and document URLs keep their file name behind a tokenized prefix
    (``ref0://image.png``); other URLs with more than four ``/`` separated
    parts are replaced by a token entirely.
    """
    if not url.startswith("http"):
        return url

    suffix = url.split(".")[-1]
    if suffix in MEDIA_SUFFIXES:
        parts = url.split("/")
        ref = add_ref_prefix("/".join(parts[:-1]), url_map)
        return f"{ref}://{parts[-1]}"

    if len(url.split("/")) > 4:
        return add_ref_prefix(url, url_map)
    return url


def refify_urls(ast: Union[AnyNode, list], url_map: dict[str, str]) -> dict[str, str]:
    """
    Rewrite link, image and video URLs in place.

    Args:
        ast: A node or a list of nodes
        url_map: Prefix to token map, updated in place

    Returns:
        The same ``url_map``
    """
    if isinstance(ast, list):
        for node in ast:
            refify_urls(node, url_map)
        return url_map

    if isinstance(ast, LinkNode):
        ast.href = process_url(ast.href, url_map)
    elif isinstance(ast, (ImageNode, VideoNode)):
        ast.src = process_url(ast.src, url_map)

    refify_urls(iter_child_nodes(ast), url_map)
    return url_map
