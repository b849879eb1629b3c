"""Storage module - provides interface and implementations for data persistence."""

from .interface import StorageInterface
from .local_storage import LocalStorage
from .care_storage import CareStorage, init_care_storage, get_care_storage

__all__ = ['StorageInterface', 'LocalStorage', 'CareStorage', 'init_care_storage', 'get_care_storage']
