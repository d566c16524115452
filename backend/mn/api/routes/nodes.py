"""
Node routes. Every node is addressed by its path of names.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List
from mn.api.dependencies import get_current_claims
from mn.db.session import get_db
from mn.schemas.node import (
    ChangeNodeContent, ChangeNodeName, ChangeParentPayload,
    ChangeParentResponse, CreateNodePayload, DeleteNode, NodeResponse
)
from mn.schemas.user import Claims
from mn.services import node_service

router = APIRouter(prefix="/node", tags=["nodes"])


@router.get("", response_model=List[NodeResponse])
def get_nodes(
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """List all nodes of the current user."""
    return node_service.list_nodes(claims.user_id, db)


@router.get("/lookup", response_model=NodeResponse)
def lookup_node(
    path: List[str] = Query(...),
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Get a single node by path, e.g. ``?path=Notes&path=todo.md``."""
    return node_service.get_node(claims.user_id, path, db)


@router.post("", response_model=NodeResponse, status_code=status.HTTP_201_CREATED)
def create_node(
    payload: CreateNodePayload,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Create a node below the given parent path."""
    return node_service.create_node(claims.user_id, payload.parent, payload.node, db)


@router.put("/content", response_model=NodeResponse)
def change_content(
    payload: ChangeNodeContent,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Replace the content of a leaf node."""
    return node_service.change_content(claims.user_id, payload.path, payload.new_content, db)


@router.put("/name", response_model=NodeResponse)
def change_name(
    payload: ChangeNodeName,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Rename a node."""
    return node_service.change_name(claims.user_id, payload.path, payload.new_name, db)


@router.put("/parent", response_model=ChangeParentResponse)
def change_parent(
    payload: ChangeParentPayload,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Move a node below another directory or to the root."""
    return node_service.move_node(claims.user_id, payload.node_path, payload.new_parent_path, db)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_node(
    payload: DeleteNode,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Delete a node. Non-empty directories need ``recursive``."""
    node_service.delete_node(claims.user_id, payload.path, db, recursive=payload.recursive)
