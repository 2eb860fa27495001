"""
Submission entity

One work sent to one organization, with its response state.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Submission:
    """Submission record as returned by the backend."""
    submission_id: int
    work_id: int
    org_id: int
    draft: str = ""
    submission_date: Optional[str] = None
    submission_type: Optional[str] = None
    response_date: Optional[str] = None
    response_type: Optional[str] = None
    cost: Optional[float] = None
    web_address: Optional[str] = None

    def is_pending(self) -> bool:
        """A submission is pending until a response other than 'Waiting' is recorded."""
        return not self.response_type or self.response_type == "Waiting"
