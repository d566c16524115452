"""
Pydantic schemas for Node entity.

Field names are exchanged in camelCase with the frontend.
"""
from pydantic import BaseModel, model_serializer
from pydantic.alias_generators import to_camel
from typing import List, Optional


class CamelModel(BaseModel):
    """Base schema reading snake_case attributes and speaking camelCase JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class NewNodePayload(CamelModel):
    """Schema describing a node to create."""
    name: str
    is_directory: bool
    content: Optional[str] = None


class CreateNodePayload(CamelModel):
    """Schema for node creation below a parent path. An empty parent means root."""
    parent: List[str] = []
    node: NewNodePayload


class NodeResponse(CamelModel):
    """Schema for node response. Directories are sent without a content field."""
    node_id: int
    node_name: str
    parent_id: Optional[int] = None
    owner_id: int
    is_directory: bool
    content: Optional[str] = None

    @model_serializer(mode="wrap")
    def omit_missing_content(self, handler):
        data = handler(self)
        if data.get("content") is None:
            data.pop("content", None)
        return data


class ChangeNodeContent(CamelModel):
    """Schema for replacing the content of a leaf node."""
    path: List[str]
    new_content: str


class ChangeNodeName(CamelModel):
    """Schema for renaming a node."""
    path: List[str]
    new_name: str


class ChangeParentPayload(CamelModel):
    """Schema for moving a node below another directory."""
    node_path: List[str]
    new_parent_path: List[str] = []


class ChangeParentResponse(CamelModel):
    """Paths of a moved node before and after the move."""
    old_path: List[str]
    new_path: List[str]


class DeleteNode(CamelModel):
    """Schema for node deletion."""
    path: List[str]
    recursive: bool = False
