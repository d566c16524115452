"""
Notebook service for the fixed notebook → section → page hierarchy.

Entities are addressed by their titles. Titles are unique per level: notebook
titles per user, section titles per notebook and page titles per section.
Deleting a notebook or section removes its children through the store's
ON DELETE CASCADE.
"""
import logging
from collections import defaultdict
from typing import List, Optional
from sqlalchemy.orm import Session
from mn.core.errors import ConflictError, InvalidValueError, NotFoundError
from mn.db.session import transaction
from mn.models.notebook import Notebook, Page, Section
from mn.schemas.notebook import PagesTreeNotebook, PagesTreePage, PagesTreeSection

logger = logging.getLogger(__name__)


def _validate_title(title: str):
    if not title or not title.strip():
        raise InvalidValueError("Title must not be empty")


# Loaders. They expect to run inside the caller's transaction.

def get_notebook(owner_id: int, notebook_title: str, db: Session) -> Notebook:
    """Get a notebook of the user by title."""
    notebook = db.query(Notebook).filter(
        Notebook.user_id == owner_id,
        Notebook.notebook_title == notebook_title
    ).first()
    if not notebook:
        raise NotFoundError(f"Notebook '{notebook_title}' not found")
    return notebook


def get_section(owner_id: int, notebook_title: str, section_title: str, db: Session) -> Section:
    """Get a section by the titles of its notebook and itself."""
    notebook = get_notebook(owner_id, notebook_title, db)
    section = db.query(Section).filter(
        Section.notebook_id == notebook.notebook_id,
        Section.section_title == section_title
    ).first()
    if not section:
        raise NotFoundError(f"Section '{section_title}' not found")
    return section


def get_page(
    owner_id: int,
    notebook_title: str,
    section_title: str,
    page_title: str,
    db: Session
) -> Page:
    """Get a page by the titles of its notebook, section and itself."""
    section = get_section(owner_id, notebook_title, section_title, db)
    page = db.query(Page).filter(
        Page.section_id == section.section_id,
        Page.page_title == page_title
    ).first()
    if not page:
        raise NotFoundError(f"Page '{page_title}' not found")
    return page


# Notebooks

def create_notebook(owner_id: int, notebook_title: str, db: Session) -> Notebook:
    """Create a notebook for the user."""
    _validate_title(notebook_title)
    with transaction(db):
        exists = db.query(Notebook.notebook_id).filter(
            Notebook.user_id == owner_id,
            Notebook.notebook_title == notebook_title
        ).first()
        if exists:
            raise ConflictError(f"Notebook '{notebook_title}' already exists")

        db.add(Notebook(notebook_title=notebook_title, user_id=owner_id))
        db.flush()
        notebook = get_notebook(owner_id, notebook_title, db)

    logger.info(f"Notebook {notebook.notebook_id} created for user {owner_id}")
    return notebook


def rename_notebook(
    owner_id: int,
    notebook_title: str,
    new_title: Optional[str],
    db: Session
) -> Notebook:
    """Rename a notebook. ``None`` keeps the current title."""
    with transaction(db):
        notebook = get_notebook(owner_id, notebook_title, db)
        if new_title is None:
            return notebook

        _validate_title(new_title)
        exists = db.query(Notebook.notebook_id).filter(
            Notebook.user_id == owner_id,
            Notebook.notebook_title == new_title,
            Notebook.notebook_id != notebook.notebook_id
        ).first()
        if exists:
            raise ConflictError(f"Notebook '{new_title}' already exists")

        count = db.query(Notebook).filter(
            Notebook.notebook_id == notebook.notebook_id
        ).update({Notebook.notebook_title: new_title})
        if count == 0:
            raise NotFoundError()
        db.refresh(notebook)
    return notebook


def delete_notebook(owner_id: int, notebook_title: str, db: Session):
    """Delete a notebook together with its sections and pages."""
    with transaction(db):
        notebook = get_notebook(owner_id, notebook_title, db)
        count = db.query(Notebook).filter(
            Notebook.notebook_id == notebook.notebook_id
        ).delete()
        if count == 0:
            raise NotFoundError()

    logger.info(f"Notebook {notebook.notebook_id} deleted for user {owner_id}")


# Sections

def create_section(owner_id: int, notebook_title: str, section_title: str, db: Session) -> Section:
    """Create a section in a notebook of the user."""
    _validate_title(section_title)
    with transaction(db):
        notebook = get_notebook(owner_id, notebook_title, db)
        exists = db.query(Section.section_id).filter(
            Section.notebook_id == notebook.notebook_id,
            Section.section_title == section_title
        ).first()
        if exists:
            raise ConflictError(f"Section '{section_title}' already exists")

        db.add(Section(section_title=section_title, notebook_id=notebook.notebook_id))
        db.flush()
        section = get_section(owner_id, notebook_title, section_title, db)
    return section


def rename_section(
    owner_id: int,
    notebook_title: str,
    section_title: str,
    new_title: Optional[str],
    db: Session
) -> Section:
    """Rename a section. ``None`` keeps the current title."""
    with transaction(db):
        section = get_section(owner_id, notebook_title, section_title, db)
        if new_title is None:
            return section

        _validate_title(new_title)
        exists = db.query(Section.section_id).filter(
            Section.notebook_id == section.notebook_id,
            Section.section_title == new_title,
            Section.section_id != section.section_id
        ).first()
        if exists:
            raise ConflictError(f"Section '{new_title}' already exists")

        count = db.query(Section).filter(
            Section.section_id == section.section_id
        ).update({Section.section_title: new_title})
        if count == 0:
            raise NotFoundError()
        db.refresh(section)
    return section


def delete_section(owner_id: int, notebook_title: str, section_title: str, db: Session):
    """Delete a section together with its pages."""
    with transaction(db):
        section = get_section(owner_id, notebook_title, section_title, db)
        count = db.query(Section).filter(
            Section.section_id == section.section_id
        ).delete()
        if count == 0:
            raise NotFoundError()


# Pages

def create_page(
    owner_id: int,
    notebook_title: str,
    section_title: str,
    page_title: str,
    content: str,
    db: Session
) -> Page:
    """Create a page in a section of the user."""
    _validate_title(page_title)
    with transaction(db):
        section = get_section(owner_id, notebook_title, section_title, db)
        exists = db.query(Page.page_id).filter(
            Page.section_id == section.section_id,
            Page.page_title == page_title
        ).first()
        if exists:
            raise ConflictError(f"Page '{page_title}' already exists")

        db.add(Page(page_title=page_title, content=content, section_id=section.section_id))
        db.flush()
        page = get_page(owner_id, notebook_title, section_title, page_title, db)
    return page


def update_page(
    owner_id: int,
    notebook_title: str,
    section_title: str,
    page_title: str,
    db: Session,
    new_title: Optional[str] = None,
    new_content: Optional[str] = None
) -> Page:
    """Change the title and/or the content of a page."""
    with transaction(db):
        page = get_page(owner_id, notebook_title, section_title, page_title, db)

        values = {}
        if new_title is not None:
            _validate_title(new_title)
            exists = db.query(Page.page_id).filter(
                Page.section_id == page.section_id,
                Page.page_title == new_title,
                Page.page_id != page.page_id
            ).first()
            if exists:
                raise ConflictError(f"Page '{new_title}' already exists")
            values[Page.page_title] = new_title
        if new_content is not None:
            values[Page.content] = new_content
        if not values:
            return page

        count = db.query(Page).filter(Page.page_id == page.page_id).update(values)
        if count == 0:
            raise NotFoundError()
        db.refresh(page)
    return page


def delete_page(
    owner_id: int,
    notebook_title: str,
    section_title: str,
    page_title: str,
    db: Session
):
    """Delete a page."""
    with transaction(db):
        page = get_page(owner_id, notebook_title, section_title, page_title, db)
        count = db.query(Page).filter(Page.page_id == page.page_id).delete()
        if count == 0:
            raise NotFoundError()


# Aggregation

def fetch_tree(owner_id: int, db: Session) -> List[PagesTreeNotebook]:
    """
    Load every notebook of the user with its sections and pages.

    Loads one level after another (notebooks, then their sections, then their
    pages) and groups the children by parent id. Order follows insertion.
    """
    with transaction(db):
        notebooks = db.query(Notebook).filter(
            Notebook.user_id == owner_id
        ).order_by(Notebook.notebook_id).all()

        notebook_ids = [notebook.notebook_id for notebook in notebooks]
        sections = []
        if notebook_ids:
            sections = db.query(Section).filter(
                Section.notebook_id.in_(notebook_ids)
            ).order_by(Section.section_id).all()

        section_ids = [section.section_id for section in sections]
        pages = []
        if section_ids:
            pages = db.query(Page).filter(
                Page.section_id.in_(section_ids)
            ).order_by(Page.page_id).all()

    pages_by_section = defaultdict(list)
    for page in pages:
        pages_by_section[page.section_id].append(
            PagesTreePage(title=page.page_title, content=page.content)
        )

    sections_by_notebook = defaultdict(list)
    for section in sections:
        sections_by_notebook[section.notebook_id].append(
            PagesTreeSection(
                title=section.section_title,
                pages=pages_by_section[section.section_id]
            )
        )

    return [
        PagesTreeNotebook(
            title=notebook.notebook_title,
            sections=sections_by_notebook[notebook.notebook_id]
        )
        for notebook in notebooks
    ]
