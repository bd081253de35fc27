"""Main URL mapping configuration file.

Only the Django admin is routed; file operations are exposed as
Python functions in ``filevault.apps.files.logic.file_operations``.
"""

from django.contrib import admin
from django.urls import path

admin.site.site_header = 'filevault'

urlpatterns = [
    path('admin/', admin.site.urls),
]
