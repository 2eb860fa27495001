"""
Validation Outcome

Result of one persistence attempt as seen by the field controllers.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional

from src.shared.application.validation import FieldIssue, ValidationResult


GENERIC_TRANSPORT_MESSAGE = "Could not save changes. Please try again."


class OutcomeKind(Enum):
    """How a persistence attempt ended"""
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Outcome of an entity update.

    - ACCEPTED: entity holds the server-confirmed record; warnings may be present
    - REJECTED: backend validation refused the update; errors explain why
    - TRANSPORT_ERROR: the call itself failed (network, backend down, timeout)
    """
    kind: OutcomeKind
    entity: Optional[Any] = None
    errors: List[FieldIssue] = field(default_factory=list)
    warnings: List[FieldIssue] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def is_accepted(self) -> bool:
        return self.kind == OutcomeKind.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.kind == OutcomeKind.REJECTED

    @property
    def is_transport_error(self) -> bool:
        return self.kind == OutcomeKind.TRANSPORT_ERROR

    def messages(self) -> List[str]:
        """User-facing failure messages ("field: message" per issue)."""
        if self.is_transport_error:
            return [GENERIC_TRANSPORT_MESSAGE]
        return [str(issue) for issue in self.errors]

    @classmethod
    def accepted(cls, entity: Any, warnings: Optional[Iterable[FieldIssue]] = None) -> 'ValidationOutcome':
        return cls(kind=OutcomeKind.ACCEPTED, entity=entity, warnings=list(warnings or []))

    @classmethod
    def rejected(
        cls,
        reason: Optional[str] = None,
        errors: Optional[Iterable[FieldIssue]] = None,
        field_name: str = "",
    ) -> 'ValidationOutcome':
        """
        Create a rejection.

        Either pass structured errors, or a single reason (optionally tied to a field).
        """
        issues = list(errors or [])
        if reason:
            issues.append(FieldIssue(field_name, reason))
        if not issues:
            issues.append(FieldIssue(field_name, "update rejected"))
        return cls(kind=OutcomeKind.REJECTED, errors=issues)

    @classmethod
    def transport_failure(cls, error: BaseException) -> 'ValidationOutcome':
        return cls(kind=OutcomeKind.TRANSPORT_ERROR, error=error)

    @classmethod
    def from_validation(cls, entity: Any, result: ValidationResult) -> 'ValidationOutcome':
        """Build an outcome from a backend ValidationResult for the given entity."""
        if result.valid:
            return cls.accepted(entity, result.warnings)
        return cls(kind=OutcomeKind.REJECTED, errors=list(result.errors), warnings=list(result.warnings))
