"""Shared markdown-it syntax tree utilities"""

LIST_TYPES = ('bullet_list', 'ordered_list')


def heading_level(node) -> int | None:
    """Return the heading level (1-6) for a heading node, else None."""
    if node.type == 'heading' and node.tag and node.tag[0] == 'h' and node.tag[1:].isdigit():
        return int(node.tag[1:])
    return None


def is_aligned(cell) -> bool:
    """True if a th/td node carries an explicit column alignment."""
    return 'text-align' in str(cell.attrs.get('style', ''))


def list_depth(node) -> int:
    """Number of list ancestors of node, not counting the innermost one."""
    depth = 0
    parent = node.parent
    while parent is not None:
        if parent.type in LIST_TYPES:
            depth += 1
        parent = parent.parent
    return max(depth - 1, 0)
