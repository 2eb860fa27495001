"""
Shared validation module.

Key Components:
- FieldIssue: a field-level error or warning
- ValidationResult: container of errors/warnings
- Validator: base class for validators
- Common validators: Required, Range, Length, Url, Custom, All
- validate_field(): convenience function for validation chains
"""
from .validation_framework import (
    FieldIssue,
    ValidationResult,
    Validator,
    RequiredValidator,
    RangeValidator,
    LengthValidator,
    UrlValidator,
    CustomValidator,
    All,
    validate_field,
)

__all__ = [
    'FieldIssue',
    'ValidationResult',
    'Validator',
    'RequiredValidator',
    'RangeValidator',
    'LengthValidator',
    'UrlValidator',
    'CustomValidator',
    'All',
    'validate_field',
]
