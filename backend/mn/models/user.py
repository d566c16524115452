"""
User model for authentication and user management.
"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from mn.db.base import BaseModel


class User(BaseModel):
    """User model with immutable username. Only the password hash changes."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships. Owned rows are removed by the store's ON DELETE CASCADE.
    nodes = relationship("Node", back_populates="owner", passive_deletes=True)
    notebooks = relationship("Notebook", back_populates="user", passive_deletes=True)
