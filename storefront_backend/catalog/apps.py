# catalog/apps.py

"""
CATALOG APP CONFIG

Products + store settings, served from the configured storage backend
(MySQL or Supabase). The app owns no Django models.
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Catalog"
