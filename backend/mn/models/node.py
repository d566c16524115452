"""
Node model for the path addressed directory/leaf tree.
"""
from sqlalchemy import (
    Boolean, CheckConstraint, Column, ForeignKey, ForeignKeyConstraint,
    Index, Integer, String, Text, UniqueConstraint, text
)
from sqlalchemy.orm import relationship
from mn.db.base import BaseModel


class Node(BaseModel):
    """
    A single entry of a user's tree, either a directory or a leaf with content.

    ``parent_is_directory`` mirrors the parent's ``is_directory`` flag so the
    composite foreign key can guarantee that a parent is a directory owned by
    the same user.
    """
    __tablename__ = "nodes"

    node_id = Column(Integer, primary_key=True, index=True)
    node_name = Column(String(255), nullable=False)
    parent_id = Column(Integer, nullable=True, index=True)
    parent_is_directory = Column(Boolean, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    is_directory = Column(Boolean, nullable=False)
    content = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("node_id", "is_directory", "owner_id", name="uq_nodes_id_type_owner"),
        ForeignKeyConstraint(
            ["parent_id", "parent_is_directory", "owner_id"],
            ["nodes.node_id", "nodes.is_directory", "nodes.owner_id"],
            ondelete="CASCADE",
            name="fk_nodes_parent",
        ),
        # Siblings below a parent.
        UniqueConstraint("owner_id", "parent_id", "node_name", name="uq_nodes_sibling_name"),
        # Root level siblings, NULL parents never collide in a unique constraint.
        Index(
            "uq_nodes_root_name",
            "owner_id",
            "node_name",
            unique=True,
            sqlite_where=text("parent_id IS NULL"),
            postgresql_where=text("parent_id IS NULL"),
        ),
        CheckConstraint(
            "(parent_id IS NULL AND parent_is_directory IS NULL)"
            " OR (parent_id IS NOT NULL AND parent_is_directory IS TRUE)",
            name="ck_nodes_parent_is_directory",
        ),
        CheckConstraint(
            "(is_directory IS TRUE AND content IS NULL)"
            " OR (is_directory IS FALSE AND content IS NOT NULL)",
            name="ck_nodes_content",
        ),
        CheckConstraint("length(node_name) > 0", name="ck_nodes_name_not_empty"),
    )

    # Relationships
    owner = relationship("User", back_populates="nodes", foreign_keys=[owner_id])

    def __repr__(self):
        kind = "dir" if self.is_directory else "leaf"
        return f"<Node {self.node_id} {self.node_name!r} ({kind}) parent={self.parent_id}>"
