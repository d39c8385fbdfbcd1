"""Search helpers for the semantic Markdown AST and its rendered output."""

import re
from typing import Callable, Optional, Union

from ..models.nodes import AnyNode, iter_child_nodes

Predicate = Callable[[AnyNode], bool]

_MAIN_REGION = re.compile(r"(?<=<-main->)[\s\S]*?(?=</-main->)")
_CHROME_REGIONS = re.compile(
    r"(<-nav->[\s\S]*?</-nav->)"
    r"|(<-footer->[\s\S]*?</-footer->)"
    r"|(<-header->[\s\S]*?</-header->)"
    r"|(<-aside->[\s\S]*?</-aside->)"
)


def find_in_ast(ast: Union[AnyNode, list], predicate: Predicate) -> Optional[AnyNode]:
    """
    Find the first node matching ``predicate`` in pre-order.

    Args:
        ast: A node or a list of nodes
        predicate: Test applied to each node

    Returns:
        The first matching node, or None
    """
    if isinstance(ast, list):
        for node in ast:
            found = find_in_ast(node, predicate)
            if found is not None:
                return found
        return None

    if predicate(ast):
        return ast
    return find_in_ast(iter_child_nodes(ast), predicate)


def find_all_in_ast(ast: Union[AnyNode, list], predicate: Predicate) -> list[AnyNode]:
    """
    Find every node matching ``predicate``.

    The children of a matching node are not searched.
    """
    if isinstance(ast, list):
        found: list[AnyNode] = []
        for node in ast:
            found.extend(find_all_in_ast(node, predicate))
        return found

    if predicate(ast):
        return [ast]
    return find_all_in_ast(iter_child_nodes(ast), predicate)


def get_main_content(markdown: str) -> str:
    """
    Isolate the main content of rendered Markdown.

    Returns the inside of the ``<-main->`` region when there is one, else the
    document without its nav, footer, header and aside regions.
    """
    if "<-main->" in markdown:
        match = _MAIN_REGION.search(markdown)
        return match.group(0) if match else ""
    return _CHROME_REGIONS.sub("", markdown)
