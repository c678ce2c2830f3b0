"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Custom storage backend (S3/MinIO/B2)
- Naming and MIME metadata helpers
- Image thumbnail generation (Pillow)

Keep infrastructure concerns separate from business logic.
"""
