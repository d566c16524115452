"""
Pydantic schemas for the notebook, section and page hierarchy.
"""
from typing import List, Optional
from mn.schemas.node import CamelModel


class NotebookResponse(CamelModel):
    """Schema for notebook response."""
    notebook_id: int
    notebook_title: str
    user_id: int


class SectionResponse(CamelModel):
    """Schema for section response."""
    section_id: int
    section_title: str
    notebook_id: int


class PageResponse(CamelModel):
    """Schema for page response."""
    page_id: int
    page_title: str
    content: str
    section_id: int


class CreateNotebookPayload(CamelModel):
    notebook_title: str


class ModifyNotebookPayload(CamelModel):
    notebook_title: Optional[str] = None


class CreateSectionPayload(CamelModel):
    section_title: str


class ModifySectionPayload(CamelModel):
    section_title: Optional[str] = None


class CreatePagePayload(CamelModel):
    page_title: str
    content: str


class ModifyPagePayload(CamelModel):
    """Schema for page update. Unset fields are left untouched."""
    page_title: Optional[str] = None
    content: Optional[str] = None


class PagesTreePage(CamelModel):
    title: str
    content: str


class PagesTreeSection(CamelModel):
    title: str
    pages: List[PagesTreePage] = []


class PagesTreeNotebook(CamelModel):
    """One notebook of the nested notebooks → sections → pages structure."""
    title: str
    sections: List[PagesTreeSection] = []
