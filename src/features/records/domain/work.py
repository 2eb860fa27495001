"""
Work entity

A single piece of writing tracked by the desk (story, poem, essay, ...).
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Work:
    """Work record as returned by the backend."""
    work_id: int
    title: str
    type: str = ""
    year: Optional[str] = None
    status: str = ""
    quality: str = ""
    doc_type: str = ""
    path: Optional[str] = None
    n_words: Optional[int] = None
