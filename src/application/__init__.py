"""
Application layer - cross-feature services

This layer contains:
- Settings schemas and managers (debounced, validated, persisted)
"""
