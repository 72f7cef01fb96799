"""
PySH Filesystem Module

Provides:
- Executable lookup on the search path (with LRU caches)
- Output redirection to files
"""

from .path_resolver import (
    PathResolver,
    LRUCache,
    get_search_path,
    DEFAULT_DIRECTORY_CACHE_SIZE,
    DEFAULT_EXECUTABLE_CACHE_SIZE,
)
from .redirection import RedirectionRouter

__all__ = [
    'PathResolver',
    'LRUCache',
    'get_search_path',
    'DEFAULT_DIRECTORY_CACHE_SIZE',
    'DEFAULT_EXECUTABLE_CACHE_SIZE',
    'RedirectionRouter',
]
