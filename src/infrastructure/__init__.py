"""
Infrastructure layer - External concerns

This layer contains:
- File-based preferences persistence
"""
