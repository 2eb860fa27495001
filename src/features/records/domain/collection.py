"""
Collection entity

A named, ordered group of works. A collection flagged as a book owns a Book record.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Collection:
    """Collection record as returned by the backend."""
    coll_id: int
    collection_name: str
    type: Optional[str] = None
    is_book: bool = False
