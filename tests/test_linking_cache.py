from __future__ import annotations

import unittest

from app.linking.cache import SnapshotCache


class SnapshotCacheTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.loads = 0

    def _loader(self) -> int:
        self.loads += 1
        return self.loads

    def test_cached_until_invalidated(self) -> None:
        cache: SnapshotCache[int] = SnapshotCache(ttl_seconds=300)
        self.assertIsNone(cache.loaded_at)
        self.assertEqual(cache.get(self._loader), 1)
        self.assertEqual(cache.get(self._loader), 1)
        self.assertIsNotNone(cache.loaded_at)

        cache.invalidate()
        self.assertEqual(cache.get(self._loader), 2)
        self.assertEqual(self.loads, 2)

    def test_invalidate_during_load_is_kept(self) -> None:
        cache: SnapshotCache[int] = SnapshotCache(ttl_seconds=300)

        def _loader_with_concurrent_write() -> int:
            value = self._loader()
            if value == 1:
                cache.invalidate()
            return value

        self.assertEqual(cache.get(_loader_with_concurrent_write), 1)
        self.assertEqual(cache.get(_loader_with_concurrent_write), 2)
        self.assertEqual(cache.get(_loader_with_concurrent_write), 2)

    def test_zero_ttl_reloads_every_time(self) -> None:
        cache: SnapshotCache[int] = SnapshotCache(ttl_seconds=0)
        self.assertEqual(cache.get(self._loader), 1)
        self.assertEqual(cache.get(self._loader), 2)


if __name__ == "__main__":
    unittest.main()
