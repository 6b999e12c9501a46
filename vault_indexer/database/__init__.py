# vault_indexer/database/__init__.py

from .base import EntityBase, DBEntity
from .connection import DatabaseManager
from .store import EntityStore

__all__ = ['EntityBase', 'DBEntity', 'DatabaseManager', 'EntityStore']
