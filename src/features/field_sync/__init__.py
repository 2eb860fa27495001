"""
Field Sync feature

Optimistic inline editing of record fields: a widget shows the user's value
immediately, one persistence call goes out, and the result is reconciled
against backend validation without ever leaving a stale value on screen.
"""
