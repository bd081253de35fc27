"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Blob storage backend (S3/MinIO/R2)
- Metadata extraction (MIME type, checksum) and storage key naming

Keep infrastructure concerns separate from business logic.
"""
