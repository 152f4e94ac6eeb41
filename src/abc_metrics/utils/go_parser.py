from functools import lru_cache
from typing import Optional, Tuple, Union

from tree_sitter import Node
from tree_sitter_languages import get_parser

from abc_metrics.config import GO_LANGUAGE, SOURCE_ENCODING


@lru_cache
def _get_parser():
    return get_parser(GO_LANGUAGE)


def parse(code: Union[str, bytes]) -> Node:
    """Return the ``source_file`` root node for the given Go source."""
    if isinstance(code, str):
        code = code.encode(SOURCE_ENCODING)
    return _get_parser().parse(code).root_node


def first_error(root: Node) -> Optional[Node]:
    """Return the first ERROR or missing node in source order, if any."""
    if not root.has_error:
        return None
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(c for c in reversed(node.children) if c.has_error or c.is_missing)
    return root


def position(node: Node) -> Tuple[int, int]:
    """1-based (line, column) of the node's first byte."""
    row, col = node.start_point
    return row + 1, col + 1
