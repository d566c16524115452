"""
Path resolution for the node tree.

A path is an ordered list of node names relative to one user's root scope.
Resolution walks the path one segment at a time instead of using a recursive
query, so it works on any store. Callers run these helpers inside their own
transaction so the whole walk sees one consistent state.
"""
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from mn.core.errors import NotFoundError
from mn.models.node import Node


def resolve_id(db: Session, owner_id: int, path: Sequence[str]) -> Optional[int]:
    """
    Resolve a path to a node id.

    Returns ``None`` for the empty path, which stands for the root scope.
    Raises ``NotFoundError`` on the first segment without a matching node.
    """
    node_id = None
    for segment in path:
        query = db.query(Node.node_id).filter(
            Node.owner_id == owner_id,
            Node.node_name == segment
        )
        if node_id is None:
            query = query.filter(Node.parent_id.is_(None))
        else:
            query = query.filter(Node.parent_id == node_id)

        row = query.first()
        if row is None:
            raise NotFoundError(f"No node named '{segment}' in path {list(path)}")
        node_id = row.node_id

    return node_id


def resolve_node(db: Session, owner_id: int, path: Sequence[str]) -> Node:
    """Load the node at the given path. The empty path has no node."""
    node_id = resolve_id(db, owner_id, path)
    if node_id is None:
        raise NotFoundError("The root scope is not a node")

    node = db.query(Node).filter(
        Node.owner_id == owner_id,
        Node.node_id == node_id
    ).first()
    if node is None:
        raise NotFoundError()
    return node


def get_owned_node(db: Session, owner_id: int, node_id: int) -> Node:
    """Load a node by id, only if it belongs to the owner."""
    node = db.query(Node).filter(
        Node.owner_id == owner_id,
        Node.node_id == node_id
    ).first()
    if node is None:
        raise NotFoundError()
    return node


def path_of(db: Session, owner_id: int, node_id: int) -> List[str]:
    """Compute the full path of a node by following its parents up to the root."""
    names = []
    current_id = node_id
    while current_id is not None:
        node = get_owned_node(db, owner_id, current_id)
        names.append(node.node_name)
        current_id = node.parent_id
    names.reverse()
    return names


def is_same_or_descendant(db: Session, owner_id: int, ancestor_id: int, node_id: Optional[int]) -> bool:
    """Check whether ``node_id`` is ``ancestor_id`` itself or lies somewhere below it."""
    current_id = node_id
    while current_id is not None:
        if current_id == ancestor_id:
            return True
        current_id = get_owned_node(db, owner_id, current_id).parent_id
    return False


def children_ids(db: Session, owner_id: int, parent_id: int) -> List[int]:
    """Ids of the direct children of a directory."""
    rows = db.query(Node.node_id).filter(
        Node.owner_id == owner_id,
        Node.parent_id == parent_id
    ).all()
    return [row.node_id for row in rows]


def subtree_ids(db: Session, owner_id: int, root_id: int) -> List[int]:
    """Ids of a node and all of its descendants, parents before children."""
    ids = [root_id]
    index = 0
    while index < len(ids):
        ids.extend(children_ids(db, owner_id, ids[index]))
        index += 1
    return ids


def sibling_exists(
    db: Session,
    owner_id: int,
    parent_id: Optional[int],
    name: str,
    exclude_id: Optional[int] = None
) -> bool:
    """Check whether a node with the given name already sits below ``parent_id``."""
    query = db.query(Node.node_id).filter(
        Node.owner_id == owner_id,
        Node.node_name == name
    )
    if parent_id is None:
        query = query.filter(Node.parent_id.is_(None))
    else:
        query = query.filter(Node.parent_id == parent_id)
    if exclude_id is not None:
        query = query.filter(Node.node_id != exclude_id)
    return query.first() is not None
