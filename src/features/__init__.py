"""
Features module - Vertical Feature Organization

Each feature module contains all related code organized by layer:
- domain/: Entities, value objects, gateway interfaces
- application/: Controllers and services
- infrastructure/: Backend implementations

Features:
- records/: Works, organizations, collections, submissions, books
- field_sync/: Optimistic inline editing of record fields
"""
