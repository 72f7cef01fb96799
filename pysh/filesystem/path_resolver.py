"""
Path Resolver Module

Finds external executables on the search path.

Two bounded LRU caches keep lookups cheap:
- directory -> names of its entries
- command name -> resolved absolute path

Neither cache is invalidated during a session: once a name resolves,
later lookups return the same path even if the directory changes.

Author: YSNRFD
Version: 1.0.0
"""

import os
import threading
from collections import OrderedDict
from typing import Optional, List, Generic, TypeVar, Hashable

from pysh.exceptions import PathResolutionError
from pysh.logger import get_logger


K = TypeVar('K', bound=Hashable)
V = TypeVar('V')

DEFAULT_DIRECTORY_CACHE_SIZE = 64
DEFAULT_EXECUTABLE_CACHE_SIZE = 256


def get_search_path(path_value: Optional[str] = None) -> List[str]:
    """
    Split a PATH value into its directories.

    Args:
        path_value: PATH string; defaults to the PATH environment variable

    Returns:
        Directories in search order (empty when PATH is unset or empty)
    """
    if path_value is None:
        path_value = os.environ.get('PATH', '')
    if not path_value:
        return []
    return path_value.split(os.pathsep)


class LRUCache(Generic[K, V]):
    """
    A bounded mapping that evicts the least recently used entry.

    Example:
        >>> cache = LRUCache(capacity=2)
        >>> cache.put('a', 1); cache.put('b', 2); cache.get('a')
        1
        >>> cache.put('c', 3)   # evicts 'b'
        >>> 'b' in cache
        False
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"LRU cache capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()
        self.evictions = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K) -> Optional[V]:
        """Return the cached value and mark it most recently used."""
        with self._lock:
            if key not in self._entries:
                return None
            self._entries.move_to_end(key)
            return self._entries[key]

    def put(self, key: K, value: V) -> Optional[K]:
        """
        Insert or refresh an entry.

        Returns:
            The evicted key, if the insert pushed one out
        """
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._entries[key] = value
                return None

            self._entries[key] = value
            if len(self._entries) > self._capacity:
                evicted, _ = self._entries.popitem(last=False)
                self.evictions += 1
                return evicted
            return None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> List[K]:
        """Keys from least to most recently used."""
        with self._lock:
            return list(self._entries.keys())

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class PathResolver:
    """
    Resolves bare command names against the search path.

    Directories are searched in PATH order and the first executable
    match wins. Each directory is listed at most once while its listing
    stays cached.

    Example:
        >>> resolver = PathResolver(['/usr/bin', '/bin'])
        >>> resolver.resolve('ls')
        '/usr/bin/ls'
    """

    def __init__(
        self,
        directories: Optional[List[str]] = None,
        directory_cache_size: int = DEFAULT_DIRECTORY_CACHE_SIZE,
        executable_cache_size: int = DEFAULT_EXECUTABLE_CACHE_SIZE
    ):
        """
        Args:
            directories: Search path; defaults to the PATH environment variable
            directory_cache_size: Number of directory listings kept
            executable_cache_size: Number of resolved names kept
        """
        self._logger = get_logger('resolver')
        self._directories = list(directories) if directories is not None else get_search_path()
        self._listings: LRUCache[str, frozenset] = LRUCache(directory_cache_size)
        self._resolved: LRUCache[str, str] = LRUCache(executable_cache_size)

    @property
    def directories(self) -> List[str]:
        return list(self._directories)

    @property
    def listing_cache(self) -> LRUCache:
        return self._listings

    @property
    def executable_cache(self) -> LRUCache:
        return self._resolved

    def resolve(self, name: str) -> Optional[str]:
        """
        Find the executable for a command name.

        Args:
            name: Bare command name as typed

        Returns:
            Absolute path of the first executable match, or None

        Raises:
            PathResolutionError: A search directory exists but cannot be listed
        """
        if not name:
            return None

        cached = self._resolved.get(name)
        if cached is not None:
            self._logger.debug("Resolved from cache", context={'name': name, 'path': cached})
            return cached

        for directory in self._directories:
            if name not in self._list_directory(directory):
                continue

            candidate = os.path.abspath(os.path.join(directory, name))
            if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
                evicted = self._resolved.put(name, candidate)
                if evicted is not None:
                    self._logger.debug("Evicted resolved name", context={'name': evicted})
                self._logger.debug("Resolved", context={'name': name, 'path': candidate})
                return candidate

        self._logger.debug("Not found on search path", context={'name': name})
        return None

    def _list_directory(self, directory: str) -> frozenset:
        """Return the entry names of a directory, listing it on a cache miss."""
        listing = self._listings.get(directory)
        if listing is not None:
            return listing

        try:
            listing = frozenset(os.listdir(directory))
        except FileNotFoundError:
            listing = frozenset()
        except OSError as e:
            raise PathResolutionError(directory, e.strerror or str(e))

        evicted = self._listings.put(directory, listing)
        if evicted is not None:
            self._logger.debug("Evicted directory listing", context={'directory': evicted})
        return listing

    def clear_cache(self) -> None:
        """Forget every cached listing and resolution."""
        self._listings.clear()
        self._resolved.clear()
