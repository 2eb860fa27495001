"""
Shared module containing cross-cutting concerns.

Structure:
    shared/
        application/
            validation/     - Field validators and ValidationResult

Usage:
    from src.shared.application.validation import RequiredValidator, validate_field
"""
