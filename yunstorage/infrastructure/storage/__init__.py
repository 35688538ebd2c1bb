"""
Storage Infrastructure Module

Provides the storage adapter manager, object storage adapters and
local file helpers.
"""

from .file_handler import FileHandler
from .storage_manager import StorageManager, AdapterState
from . import object_storage

__all__ = [
    'FileHandler',
    'StorageManager',
    'AdapterState',
    'object_storage'
]
