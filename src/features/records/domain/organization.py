"""
Organization entity

A journal, press or contest that receives submissions.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Organization:
    """Organization record as returned by the backend."""
    org_id: int
    name: str
    other_name: Optional[str] = None
    url: Optional[str] = None
    other_url: Optional[str] = None
    status: str = ""
    type: str = ""
    timing: Optional[str] = None
    accepts: Optional[str] = None
    my_interest: Optional[str] = None
    ranking: Optional[int] = None
