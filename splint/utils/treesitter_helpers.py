from collections.abc import Iterator

from tree_sitter import Node as TSNode


def iter_leaves(
    root: TSNode,
    *,
    atomic: frozenset[str] = frozenset(),
    skipped: frozenset[str] = frozenset(),
) -> Iterator[TSNode]:
    """Yield leaf nodes in document order.

    Nodes whose type is in ``atomic`` are yielded whole without descending into
    them; nodes whose type is in ``skipped`` are dropped with their subtree.
    """
    stack: list[TSNode] = [root]
    while stack:
        node = stack.pop()
        if node.type in skipped:
            continue
        if node.type in atomic or node.child_count == 0:
            yield node
            continue
        stack.extend(reversed(node.children))


def find_missing_node(root: TSNode, types: frozenset[str]) -> TSNode | None:
    """Return the first MISSING node of one of ``types`` inserted by error recovery."""
    stack: list[TSNode] = [root]
    while stack:
        node = stack.pop()
        if node.is_missing and node.type in types:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None
