"""Models package - Import all models for SQLAlchemy registration."""
from mn.models.user import User
from mn.models.node import Node
from mn.models.notebook import Notebook, Section, Page

__all__ = [
    "User",
    "Node",
    "Notebook",
    "Section",
    "Page",
]
