"""Build the permission tree from flat permission rows.

Nodes are linked by matching ``parent_code`` against ``code``. A node becomes
a root when its ``parent_code`` is empty, names no known permission, or names
itself. Nodes caught in a parent cycle are never reachable from a root, so
they are detached from their parent and promoted to roots as well.

Every sibling list is ordered by ``(type, sort)``. The sort is stable, so
rows fed in ``(type, sort, id)`` order keep ``id`` as the final tie-breaker.
"""

from typing import Any, Dict, Iterable, List, Optional, Set

from rbac_admin.schemas.schemas import PermissionTreeNode


def _sort_key(node: PermissionTreeNode):
    return (node.type, node.sort)


def sort_tree(nodes: List[PermissionTreeNode]) -> None:
    """Sort a sibling list and all descendants in place."""
    nodes.sort(key=_sort_key)
    for node in nodes:
        if node.children:
            sort_tree(node.children)


def _collect_reachable(roots: List[PermissionTreeNode], seen: Set[str]) -> None:
    stack = list(roots)
    while stack:
        node = stack.pop()
        if node.code in seen:
            continue
        seen.add(node.code)
        stack.extend(node.children)


def build_permission_tree(
    permissions: Iterable[Any],
    checked_ids: Optional[Set[int]] = None,
) -> List[PermissionTreeNode]:
    """Assemble permissions into a sorted forest.

    Args:
        permissions: rows exposing id, name, code, parent_code, path, type,
            sort and description attributes.
        checked_ids: ids to flag with ``checked=True``.

    Returns:
        The root nodes, each carrying its sorted children.
    """
    checked_ids = checked_ids or set()
    nodes: Dict[str, PermissionTreeNode] = {}
    order: List[PermissionTreeNode] = []

    for perm in permissions:
        node = PermissionTreeNode(
            id=perm.id,
            name=perm.name,
            code=perm.code,
            parent_code=perm.parent_code or "",
            path=perm.path or "",
            type=perm.type,
            sort=perm.sort or 0,
            description=perm.description or "",
            checked=perm.id in checked_ids,
        )
        # Codes are unique in the table; keep the first if fed duplicates
        if node.code in nodes:
            continue
        nodes[node.code] = node
        order.append(node)

    roots: List[PermissionTreeNode] = []
    parents: Dict[str, PermissionTreeNode] = {}
    for node in order:
        parent = nodes.get(node.parent_code) if node.parent_code else None
        if parent is None or parent is node:
            roots.append(node)
            continue
        parent.children.append(node)
        parent.has_children = True
        parents[node.code] = parent

    seen: Set[str] = set()
    _collect_reachable(roots, seen)
    for node in order:
        if node.code in seen:
            continue
        # Break the cycle at the first unreachable node in input order
        parent = parents.pop(node.code)
        parent.children = [c for c in parent.children if c is not node]
        parent.has_children = bool(parent.children)
        roots.append(node)
        _collect_reachable([node], seen)

    sort_tree(roots)
    return roots
