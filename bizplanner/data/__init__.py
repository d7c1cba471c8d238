"""
Data-access layer: the generic entity client, file storage and the
collection cache. Views reach the store through nothing else.
"""

from .client import ENTITIES, EntityClient, EntitySpec, PlannerClient, get_entity_spec
from .cache import CacheEntry, CollectionCache
from .storage import FileStorage

__all__ = [
    'ENTITIES',
    'EntityClient',
    'EntitySpec',
    'PlannerClient',
    'get_entity_spec',
    'CacheEntry',
    'CollectionCache',
    'FileStorage',
]
