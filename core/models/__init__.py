"""
Catalog data models.
"""

from .metadata_record import MetadataRecord
from .settings import AppSettings

__all__ = ["MetadataRecord", "AppSettings"]
