"""
Notebook, section and page models for the fixed three level hierarchy.
"""
from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from mn.db.base import BaseModel


class Notebook(BaseModel):
    """Top level container owned by a user."""
    __tablename__ = "notebooks"

    notebook_id = Column(Integer, primary_key=True, index=True)
    notebook_title = Column(String(255), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "notebook_title", name="uq_notebooks_title"),
    )

    # Relationships
    user = relationship("User", back_populates="notebooks")
    sections = relationship(
        "Section", back_populates="notebook", cascade="all, delete-orphan", passive_deletes=True
    )


class Section(BaseModel):
    """Section of a notebook."""
    __tablename__ = "sections"

    section_id = Column(Integer, primary_key=True, index=True)
    section_title = Column(String(255), nullable=False)
    notebook_id = Column(
        Integer, ForeignKey("notebooks.notebook_id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("notebook_id", "section_title", name="uq_sections_title"),
    )

    # Relationships
    notebook = relationship("Notebook", back_populates="sections")
    pages = relationship(
        "Page", back_populates="section", cascade="all, delete-orphan", passive_deletes=True
    )


class Page(BaseModel):
    """Page of a section holding the actual content."""
    __tablename__ = "pages"

    page_id = Column(Integer, primary_key=True, index=True)
    page_title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    section_id = Column(
        Integer, ForeignKey("sections.section_id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("section_id", "page_title", name="uq_pages_title"),
    )

    # Relationships
    section = relationship("Section", back_populates="pages")
