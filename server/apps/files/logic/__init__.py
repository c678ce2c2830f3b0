"""Business logic layer for files app.

This package contains all business logic for file operations:
- Upload with naming, previews and compensating rollback
- Lookup, listing and search
- Trash lifecycle (soft delete, restore, hide, purge)
- Per-user tag palette

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).
"""
