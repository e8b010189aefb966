"""
Data models for skuidsync
"""

from .category import Category, CATEGORY_NAMES
from .record import Record, MANIFEST_EXTENSION, BODY_EXTENSION
from .retrieve import RetrieveMetadata, RetrieveRequest
from .deploy import DeployPayload, DeployResult

__all__ = [
    'Category',
    'CATEGORY_NAMES',
    'Record',
    'MANIFEST_EXTENSION',
    'BODY_EXTENSION',
    'RetrieveMetadata',
    'RetrieveRequest',
    'DeployPayload',
    'DeployResult',
]
