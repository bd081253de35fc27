"""Business logic layer for files app.

This package contains all business logic for file operations:
- Access policy decisions for every file operation
- File upload, download, delete and listing (the file registry)

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).

Reference: https://github.com/dry-python
for decoupling business logic from Django views.
"""
