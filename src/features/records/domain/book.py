"""
Book entity

Publishing metadata for a collection that is being built into a book,
including the free-text front and back matter edited in the book panels.
"""
from dataclasses import dataclass
from typing import Optional

BOOK_STATUS_DRAFT = "draft"
BOOK_STATUS_READY = "ready"


@dataclass(frozen=True)
class Book:
    """Book record as returned by the backend."""
    book_id: int
    coll_id: int
    title: str
    author: str = ""
    subtitle: Optional[str] = None
    copyright: Optional[str] = None
    dedication: Optional[str] = None
    acknowledgements: Optional[str] = None
    about_author: Optional[str] = None
    afterword: Optional[str] = None
    status: str = BOOK_STATUS_DRAFT
