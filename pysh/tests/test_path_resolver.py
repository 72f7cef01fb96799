"""
Path Resolver Tests

Search order, executable checks and the two LRU caches.
"""

import os
import stat
import tempfile
import unittest
from unittest import mock

from pysh.exceptions import PathResolutionError
from pysh.filesystem.path_resolver import LRUCache, PathResolver, get_search_path


def make_file(directory, name, executable=True, content='#!/bin/sh\nexit 0\n'):
    path = os.path.join(directory, name)
    with open(path, 'w') as f:
        f.write(content)
    mode = 0o755 if executable else 0o644
    os.chmod(path, mode)
    return path


class TestLRUCache(unittest.TestCase):
    """Test the bounded cache."""

    def test_get_and_put(self):
        cache = LRUCache(capacity=2)
        self.assertIsNone(cache.get('a'))
        cache.put('a', 1)
        self.assertEqual(cache.get('a'), 1)
        self.assertEqual(len(cache), 1)

    def test_evicts_least_recently_used(self):
        cache = LRUCache(capacity=2)
        cache.put('a', 1)
        cache.put('b', 2)
        cache.get('a')
        evicted = cache.put('c', 3)

        self.assertEqual(evicted, 'b')
        self.assertIn('a', cache)
        self.assertIn('c', cache)
        self.assertNotIn('b', cache)
        self.assertEqual(cache.evictions, 1)

    def test_refresh_existing_key(self):
        cache = LRUCache(capacity=2)
        cache.put('a', 1)
        cache.put('b', 2)
        self.assertIsNone(cache.put('a', 10))
        self.assertEqual(cache.keys(), ['b', 'a'])
        self.assertEqual(cache.get('a'), 10)

    def test_invalid_capacity(self):
        with self.assertRaises(ValueError):
            LRUCache(capacity=0)


class TestSearchPath(unittest.TestCase):
    """Test PATH splitting."""

    def test_split(self):
        value = os.pathsep.join(['/usr/bin', '/bin'])
        self.assertEqual(get_search_path(value), ['/usr/bin', '/bin'])

    def test_empty(self):
        self.assertEqual(get_search_path(''), [])

    def test_reads_environment(self):
        with mock.patch.dict(os.environ, {'PATH': os.pathsep.join(['/a', '/b'])}):
            self.assertEqual(get_search_path(), ['/a', '/b'])

    def test_unset(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_search_path(), [])


class TestPathResolver(unittest.TestCase):
    """Test executable resolution."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = os.path.realpath(self._tmp.name)
        self.first = os.path.join(self.root, 'first')
        self.second = os.path.join(self.root, 'second')
        os.mkdir(self.first)
        os.mkdir(self.second)

    def tearDown(self):
        self._tmp.cleanup()

    def test_finds_executable(self):
        path = make_file(self.second, 'tool')
        resolver = PathResolver([self.first, self.second])
        self.assertEqual(resolver.resolve('tool'), path)

    def test_earlier_directory_shadows_later(self):
        first = make_file(self.first, 'tool')
        make_file(self.second, 'tool')
        resolver = PathResolver([self.first, self.second])
        self.assertEqual(resolver.resolve('tool'), first)

    def test_skips_non_executable(self):
        make_file(self.first, 'tool', executable=False)
        second = make_file(self.second, 'tool')
        resolver = PathResolver([self.first, self.second])
        self.assertEqual(resolver.resolve('tool'), second)

    def test_skips_directories(self):
        os.mkdir(os.path.join(self.first, 'tool'))
        resolver = PathResolver([self.first])
        self.assertIsNone(resolver.resolve('tool'))

    def test_not_found(self):
        resolver = PathResolver([self.first, self.second])
        self.assertIsNone(resolver.resolve('nothing-here'))
        self.assertIsNone(resolver.resolve(''))

    def test_case_sensitive(self):
        make_file(self.first, 'tool')
        resolver = PathResolver([self.first])
        if os.path.exists(os.path.join(self.first, 'TOOL')):
            self.skipTest("case-insensitive filesystem")
        self.assertIsNone(resolver.resolve('TOOL'))

    def test_missing_directory_is_empty(self):
        path = make_file(self.second, 'tool')
        missing = os.path.join(self.root, 'missing')
        resolver = PathResolver([missing, '', self.second])
        self.assertEqual(resolver.resolve('tool'), path)

    def test_unreadable_directory_is_fatal(self):
        resolver = PathResolver([self.first])
        with mock.patch('os.listdir', side_effect=PermissionError(13, 'Permission denied')):
            with self.assertRaises(PathResolutionError) as ctx:
                resolver.resolve('tool')
        self.assertEqual(ctx.exception.path, self.first)

    def test_resolution_is_cached(self):
        path = make_file(self.first, 'tool')
        resolver = PathResolver([self.first])
        self.assertEqual(resolver.resolve('tool'), path)

        # Shadowing it in an earlier directory does not change the answer
        resolver._directories.insert(0, self.second)
        make_file(self.second, 'tool')
        os.remove(path)

        self.assertEqual(resolver.resolve('tool'), path)
        self.assertIn('tool', resolver.executable_cache)

    def test_directory_listed_once(self):
        make_file(self.first, 'a')
        make_file(self.first, 'b')
        resolver = PathResolver([self.first])

        with mock.patch('os.listdir', wraps=os.listdir) as listdir:
            resolver.resolve('a')
            resolver.resolve('b')
            resolver.resolve('missing')

        listdir.assert_called_once_with(self.first)
        self.assertIn(self.first, resolver.listing_cache)

    def test_cache_sizes_are_bounded(self):
        dirs = []
        for i in range(3):
            d = os.path.join(self.root, f'd{i}')
            os.mkdir(d)
            make_file(d, f'tool{i}')
            dirs.append(d)

        resolver = PathResolver(dirs, directory_cache_size=2, executable_cache_size=1)
        for i in range(3):
            self.assertIsNotNone(resolver.resolve(f'tool{i}'))

        self.assertEqual(len(resolver.listing_cache), 2)
        self.assertEqual(len(resolver.executable_cache), 1)
        self.assertEqual(resolver.executable_cache.keys(), ['tool2'])

    def test_clear_cache(self):
        make_file(self.first, 'tool')
        resolver = PathResolver([self.first])
        resolver.resolve('tool')
        resolver.clear_cache()
        self.assertEqual(len(resolver.listing_cache), 0)
        self.assertEqual(len(resolver.executable_cache), 0)

    def test_defaults_to_environment(self):
        with mock.patch.dict(os.environ, {'PATH': self.first}):
            resolver = PathResolver()
        self.assertEqual(resolver.directories, [self.first])


if __name__ == '__main__':
    unittest.main()
