"""
Node service for the lifecycle of the user owned node tree.

Every operation takes the owner id explicitly and runs as one transaction:
resolve the path(s), validate, mutate, re-read the result and commit. Any
failure rolls the whole operation back.
"""
import logging
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from mn.core.errors import (
    ConflictError, DirectoryNotEmptyError, InvalidValueError, NotFoundError
)
from mn.db.session import transaction
from mn.models.node import Node
from mn.schemas.node import ChangeParentResponse, NewNodePayload
from mn.services.path_service import (
    children_ids, get_owned_node, is_same_or_descendant, path_of,
    resolve_id, resolve_node, sibling_exists, subtree_ids
)

logger = logging.getLogger(__name__)


def _validate_name(name: str):
    if not name or not name.strip():
        raise InvalidValueError("Node name must not be empty")


def build_node(payload: NewNodePayload, parent_id: Optional[int], owner_id: int) -> Node:
    """
    Construct a new, not yet persisted node from a creation payload.

    Directories never carry content and leaves always do.
    """
    _validate_name(payload.name)
    if payload.is_directory and payload.content is not None:
        raise InvalidValueError("A directory cannot have content")
    if not payload.is_directory and payload.content is None:
        raise InvalidValueError("A leaf node requires content")

    return Node(
        node_name=payload.name,
        parent_id=parent_id,
        parent_is_directory=True if parent_id is not None else None,
        owner_id=owner_id,
        is_directory=payload.is_directory,
        content=payload.content
    )


def _require_directory(db: Session, owner_id: int, node_id: Optional[int]):
    """The root scope and directories may hold children, leaves may not."""
    if node_id is None:
        return
    if not get_owned_node(db, owner_id, node_id).is_directory:
        raise InvalidValueError("Parent node is not a directory")


def list_nodes(owner_id: int, db: Session) -> List[Node]:
    """Get all nodes owned by the user."""
    with transaction(db):
        nodes = db.query(Node).filter(
            Node.owner_id == owner_id
        ).order_by(Node.node_id).all()
    return nodes


def get_node(owner_id: int, path: Sequence[str], db: Session) -> Node:
    """Get the node at the given path."""
    with transaction(db):
        node = resolve_node(db, owner_id, path)
    return node


def create_node(
    owner_id: int,
    parent_path: Sequence[str],
    payload: NewNodePayload,
    db: Session
) -> Node:
    """Create a node below ``parent_path``. An empty parent path creates a root node."""
    with transaction(db):
        parent_id = resolve_id(db, owner_id, parent_path)
        _require_directory(db, owner_id, parent_id)

        new_node = build_node(payload, parent_id, owner_id)
        if sibling_exists(db, owner_id, parent_id, payload.name):
            raise ConflictError(f"A node named '{payload.name}' already exists there")

        db.add(new_node)
        db.flush()

        node = resolve_node(db, owner_id, [*parent_path, payload.name])

    logger.info(f"Node {node.node_id} created at {[*parent_path, payload.name]} for user {owner_id}")
    return node


def change_content(owner_id: int, path: Sequence[str], new_content: str, db: Session) -> Node:
    """Replace the content of a leaf node."""
    with transaction(db):
        node = resolve_node(db, owner_id, path)
        if node.is_directory:
            raise InvalidValueError("A directory has no content")

        count = db.query(Node).filter(
            Node.owner_id == owner_id,
            Node.node_id == node.node_id
        ).update({Node.content: new_content})
        if count == 0:
            raise NotFoundError()

        db.refresh(node)
    return node


def change_name(owner_id: int, path: Sequence[str], new_name: str, db: Session) -> Node:
    """Rename a node in place. Its id, owner, type and parent stay the same."""
    _validate_name(new_name)
    with transaction(db):
        node = resolve_node(db, owner_id, path)
        if sibling_exists(db, owner_id, node.parent_id, new_name, exclude_id=node.node_id):
            raise ConflictError(f"A node named '{new_name}' already exists there")

        count = db.query(Node).filter(
            Node.owner_id == owner_id,
            Node.node_id == node.node_id
        ).update({Node.node_name: new_name})
        if count == 0:
            raise NotFoundError()

        db.refresh(node)

    logger.info(f"Node {node.node_id} renamed to '{new_name}' for user {owner_id}")
    return node


def move_node(
    owner_id: int,
    node_path: Sequence[str],
    new_parent_path: Sequence[str],
    db: Session
) -> ChangeParentResponse:
    """
    Move a node, including its subtree, below another directory.

    An empty ``new_parent_path`` moves the node to the root scope. Moving a
    node below itself or one of its descendants is rejected.
    """
    with transaction(db):
        node = resolve_node(db, owner_id, node_path)
        new_parent_id = resolve_id(db, owner_id, new_parent_path)

        if new_parent_id is not None:
            _require_directory(db, owner_id, new_parent_id)
            if is_same_or_descendant(db, owner_id, node.node_id, new_parent_id):
                raise InvalidValueError("A node cannot be moved below itself")

        if sibling_exists(db, owner_id, new_parent_id, node.node_name, exclude_id=node.node_id):
            raise ConflictError(f"A node named '{node.node_name}' already exists there")

        count = db.query(Node).filter(
            Node.owner_id == owner_id,
            Node.node_id == node.node_id
        ).update({
            Node.parent_id: new_parent_id,
            Node.parent_is_directory: True if new_parent_id is not None else None
        })
        if count == 0:
            raise NotFoundError()

        db.refresh(node)
        new_path = path_of(db, owner_id, node.node_id)

    logger.info(f"Node {node.node_id} moved from {list(node_path)} to {new_path} for user {owner_id}")
    return ChangeParentResponse(old_path=list(node_path), new_path=new_path)


def delete_node(owner_id: int, path: Sequence[str], db: Session, recursive: bool = False):
    """
    Delete the node at the given path.

    A directory with children is only deleted when ``recursive`` is set, in
    which case the whole subtree goes with it.
    """
    with transaction(db):
        node = resolve_node(db, owner_id, path)

        ids = [node.node_id]
        if node.is_directory and children_ids(db, owner_id, node.node_id):
            if not recursive:
                raise DirectoryNotEmptyError()
            ids = subtree_ids(db, owner_id, node.node_id)

        count = db.query(Node).filter(
            Node.owner_id == owner_id,
            Node.node_id.in_(ids)
        ).delete()
        if count == 0:
            raise NotFoundError()

    logger.info(f"Deleted {len(ids)} node(s) at {list(path)} for user {owner_id}")
