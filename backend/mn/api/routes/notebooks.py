"""
Notebook, section and page routes addressed by titles.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from mn.api.dependencies import get_current_claims
from mn.db.session import get_db
from mn.schemas.notebook import (
    CreateNotebookPayload, CreatePagePayload, CreateSectionPayload,
    ModifyNotebookPayload, ModifyPagePayload, ModifySectionPayload,
    NotebookResponse, PageResponse, PagesTreeNotebook, SectionResponse
)
from mn.schemas.user import Claims
from mn.services import notebook_service

router = APIRouter(prefix="/notebook", tags=["notebooks"])


@router.get("", response_model=List[PagesTreeNotebook])
def fetch_notebooks(
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Get all notebooks of the current user with their sections and pages."""
    return notebook_service.fetch_tree(claims.user_id, db)


@router.post("", response_model=NotebookResponse, status_code=status.HTTP_201_CREATED)
def create_notebook(
    payload: CreateNotebookPayload,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Create a notebook."""
    return notebook_service.create_notebook(claims.user_id, payload.notebook_title, db)


@router.put("/{notebook_title}", response_model=NotebookResponse)
def modify_notebook(
    notebook_title: str,
    payload: ModifyNotebookPayload,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Rename a notebook."""
    return notebook_service.rename_notebook(
        claims.user_id, notebook_title, payload.notebook_title, db
    )


@router.delete("/{notebook_title}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notebook(
    notebook_title: str,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Delete a notebook with all its sections and pages."""
    notebook_service.delete_notebook(claims.user_id, notebook_title, db)


@router.post(
    "/{notebook_title}/section",
    response_model=SectionResponse,
    status_code=status.HTTP_201_CREATED
)
def create_section(
    notebook_title: str,
    payload: CreateSectionPayload,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Create a section in a notebook."""
    return notebook_service.create_section(
        claims.user_id, notebook_title, payload.section_title, db
    )


@router.put("/{notebook_title}/section/{section_title}", response_model=SectionResponse)
def modify_section(
    notebook_title: str,
    section_title: str,
    payload: ModifySectionPayload,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Rename a section."""
    return notebook_service.rename_section(
        claims.user_id, notebook_title, section_title, payload.section_title, db
    )


@router.delete(
    "/{notebook_title}/section/{section_title}",
    status_code=status.HTTP_204_NO_CONTENT
)
def delete_section(
    notebook_title: str,
    section_title: str,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Delete a section with all its pages."""
    notebook_service.delete_section(claims.user_id, notebook_title, section_title, db)


@router.post(
    "/{notebook_title}/section/{section_title}/page",
    response_model=PageResponse,
    status_code=status.HTTP_201_CREATED
)
def create_page(
    notebook_title: str,
    section_title: str,
    payload: CreatePagePayload,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Create a page in a section."""
    return notebook_service.create_page(
        claims.user_id, notebook_title, section_title,
        payload.page_title, payload.content, db
    )


@router.put(
    "/{notebook_title}/section/{section_title}/page/{page_title}",
    response_model=PageResponse
)
def modify_page(
    notebook_title: str,
    section_title: str,
    page_title: str,
    payload: ModifyPagePayload,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Change the title and/or content of a page."""
    return notebook_service.update_page(
        claims.user_id, notebook_title, section_title, page_title, db,
        new_title=payload.page_title,
        new_content=payload.content
    )


@router.delete(
    "/{notebook_title}/section/{section_title}/page/{page_title}",
    status_code=status.HTTP_204_NO_CONTENT
)
def delete_page(
    notebook_title: str,
    section_title: str,
    page_title: str,
    claims: Claims = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """Delete a page."""
    notebook_service.delete_page(claims.user_id, notebook_title, section_title, page_title, db)
