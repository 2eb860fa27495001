"""
Validation Framework

Composable field validators producing structured, field-level results.
Used by the record store to validate entities before accepting an update and
by settings schemas to validate configuration values.

Usage:
    result = validate_field("name", org.name, [
        RequiredValidator(),
        LengthValidator(max_length=200),
    ])
    if not result.valid:
        for issue in result.errors:
            print(issue)          # "name: is required"

    # Collect results for a whole record
    result = ValidationResult()
    result.merge(validate_field("url", org.url, UrlValidator()))
    result.merge(validate_field("cost", sub.cost, RangeValidator(min_value=0)))
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, List, Callable, Union
from urllib.parse import urlparse


# =============================================================================
# Validation Result
# =============================================================================

@dataclass(frozen=True)
class FieldIssue:
    """A single error or warning attached to a field."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}" if self.field else self.message


@dataclass
class ValidationResult:
    """
    Result of validation operations.

    Attributes:
        errors: Field-level failures (any error makes the result invalid)
        warnings: Field-level, non-blocking issues

    Can be used in boolean context:
        if result:
            print("Valid!")
    """
    errors: List[FieldIssue] = field(default_factory=list)
    warnings: List[FieldIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.append(FieldIssue(field_name, message))

    def add_warning(self, field_name: str, message: str) -> None:
        self.warnings.append(FieldIssue(field_name, message))

    def merge(self, other: 'ValidationResult') -> None:
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def error_messages(self) -> List[str]:
        return [str(issue) for issue in self.errors]

    def warning_messages(self) -> List[str]:
        return [str(issue) for issue in self.warnings]

    def __bool__(self) -> bool:
        return self.valid


# =============================================================================
# Base Validator
# =============================================================================

class Validator(ABC):
    """
    Abstract base class for validators.

    Subclass and implement validate() to create custom validators:

        class EvenNumberValidator(Validator):
            def validate(self, value, field_name=""):
                result = ValidationResult()
                if value % 2 != 0:
                    result.add_error(field_name, "must be an even number")
                return result
    """

    @abstractmethod
    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        """
        Validate a value.

        Args:
            value: The value to validate
            field_name: Field name attached to every issue

        Returns:
            ValidationResult with any errors/warnings
        """
        pass

    def __call__(self, value: Any, field_name: str = "") -> ValidationResult:
        return self.validate(value, field_name)


# =============================================================================
# Common Validators
# =============================================================================

class RequiredValidator(Validator):
    """Value must not be None, blank, or an empty collection."""

    def __init__(self, message: str = "is required"):
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult()

        if value is None:
            result.add_error(field_name, self.message)
        elif isinstance(value, str) and not value.strip():
            result.add_error(field_name, self.message)
        elif isinstance(value, (list, dict, set)) and len(value) == 0:
            result.add_error(field_name, self.message)

        return result


class RangeValidator(Validator):
    """
    Numeric value must lie within [min_value, max_value] (inclusive).

    Usage:
        RangeValidator(min_value=0)                 # non-negative
        RangeValidator(min_value=0, max_value=100)
    """

    def __init__(
        self,
        min_value: Optional[Union[int, float]] = None,
        max_value: Optional[Union[int, float]] = None,
        message: Optional[str] = None,
    ):
        self.min_value = min_value
        self.max_value = max_value
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult()

        if value is None:
            return result

        if isinstance(value, bool):
            result.add_error(field_name, "must be a number, got bool")
            return result

        try:
            num_value = float(value)
        except (TypeError, ValueError):
            result.add_error(field_name, f"must be a number, got {type(value).__name__}")
            return result

        if self.min_value is not None and num_value < self.min_value:
            result.add_error(field_name, self.message or f"must be at least {self.min_value} (got {value})")

        if self.max_value is not None and num_value > self.max_value:
            result.add_error(field_name, self.message or f"must be at most {self.max_value} (got {value})")

        return result


class LengthValidator(Validator):
    """Length of a string or sized value must lie within the given bounds."""

    def __init__(
        self,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        message: Optional[str] = None,
    ):
        self.min_length = min_length
        self.max_length = max_length
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult()

        if value is None:
            return result

        try:
            length = len(value)
        except TypeError:
            result.add_error(field_name, f"cannot determine length of {type(value).__name__}")
            return result

        if self.min_length is not None and length < self.min_length:
            result.add_error(field_name, self.message or f"must be at least {self.min_length} characters (got {length})")

        if self.max_length is not None and length > self.max_length:
            result.add_error(field_name, self.message or f"must not exceed {self.max_length} characters (got {length})")

        return result


class UrlValidator(Validator):
    """Empty values pass; anything else must be an http(s) URL."""

    def __init__(self, message: str = "must be a valid HTTP/HTTPS URL"):
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult()

        if value is None:
            return result

        trimmed = str(value).strip()
        if not trimmed:
            return result

        parsed = urlparse(trimmed)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            result.add_error(field_name, self.message)

        return result


class CustomValidator(Validator):
    """
    Validator with a custom predicate.

    Usage:
        CustomValidator(lambda v: v % 2 == 0, "must be even")
    """

    def __init__(self, func: Callable[[Any], bool], message: str = "validation failed"):
        self.func = func
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult()

        if value is None:
            return result

        if not self.func(value):
            result.add_error(field_name, self.message)

        return result


class All(Validator):
    """
    AND-composition: every validator runs and all issues are collected.

    With stop_on_first_error=True the chain stops at the first failing validator.
    """

    def __init__(self, *validators: Validator, stop_on_first_error: bool = False):
        self.validators = validators
        self.stop_on_first_error = stop_on_first_error

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult()

        for validator in self.validators:
            sub_result = validator.validate(value, field_name)
            result.merge(sub_result)

            if self.stop_on_first_error and not sub_result.valid:
                break

        return result


# =============================================================================
# Convenience Functions
# =============================================================================

def validate_field(
    field_name: str,
    value: Any,
    validators: Union[Validator, List[Validator]],
) -> ValidationResult:
    """
    Validate a field value against one validator or a list of them.

    Usage:
        result = validate_field("name", name, [RequiredValidator(), LengthValidator(max_length=200)])
    """
    if isinstance(validators, Validator):
        return validators.validate(value, field_name)

    return All(*validators).validate(value, field_name)
