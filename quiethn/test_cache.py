#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 19:27:09 krylon>
#
# /data/code/python/quiethn/test_cache.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the QuietHN news reader. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
quiethn.test_cache

(c) 2026 Benjamin Walkenhorst
"""

import unittest
from datetime import datetime, timedelta
from threading import Thread
from typing import Final

from quiethn.cache import Cache, RWLock
from quiethn.model import Item, Story


class Clock:
    """A clock that only moves when told to."""

    __slots__ = ["now"]

    now: datetime

    def __init__(self) -> None:
        self.now = datetime(2026, 10, 19, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward."""
        self.now += delta


def make_story(item_id: int, url: str = "https://www.example.com/") -> Story:
    """Create a Story for testing."""
    return Story.from_item(Item(item_id=item_id,
                                kind="story",
                                title=f"Story #{item_id}",
                                url=url))


class TestCache(unittest.TestCase):
    """Test the Cache."""

    def test_01_ttl_types(self) -> None:
        """Test the TTL can be given in seconds or as a timedelta."""
        self.assertEqual(Cache(60).ttl, timedelta(minutes=1))
        self.assertEqual(Cache(1.5).ttl, timedelta(seconds=1.5))
        self.assertEqual(Cache(timedelta(hours=1)).ttl, timedelta(hours=1))
        self.assertEqual(Cache().ttl, timedelta(minutes=15))
        with self.assertRaises(TypeError):
            Cache("forever")  # type: ignore

    def test_02_lookup_store(self) -> None:
        """Test storing and looking up Stories."""
        cache: Final[Cache] = Cache()
        story, found = cache.lookup(1)
        self.assertFalse(found)
        self.assertIsNone(story)

        s1: Final[Story] = make_story(1)
        cache.store(1, s1)
        story, found = cache.lookup(1)
        self.assertTrue(found)
        self.assertEqual(story, s1)
        self.assertEqual(len(cache), 1)

        _, found = cache.lookup(2)
        self.assertFalse(found)

    def test_03_overwrite(self) -> None:
        """Test that the last write wins."""
        clock: Final[Clock] = Clock()
        cache: Final[Cache] = Cache(timedelta(minutes=15), clock)
        cache.store(1, make_story(1, "https://a.example.com/"))
        clock.advance(timedelta(minutes=10))
        cache.store(1, make_story(1, "https://b.example.com/"))
        clock.advance(timedelta(minutes=10))

        story, found = cache.lookup(1)
        self.assertTrue(found)
        assert story is not None
        self.assertEqual(story.host, "b.example.com")
        self.assertEqual(len(cache), 1)

    def test_04_expiry(self) -> None:
        """Test that old entries are treated as missing but not removed."""
        clock: Final[Clock] = Clock()
        cache: Final[Cache] = Cache(timedelta(minutes=15), clock)
        cache.store(1, make_story(1))

        clock.advance(timedelta(minutes=14, seconds=59))
        _, found = cache.lookup(1)
        self.assertTrue(found)

        clock.advance(timedelta(seconds=1))
        story, found = cache.lookup(1)
        self.assertFalse(found)
        self.assertIsNone(story)
        self.assertEqual(len(cache), 1)

    def test_05_negative(self) -> None:
        """Test caching the fact that an Item is not a Story."""
        cache: Final[Cache] = Cache()
        cache.store(7, None)
        story, found = cache.lookup(7)
        self.assertTrue(found)
        self.assertIsNone(story)

    def test_06_purge(self) -> None:
        """Test removing stale entries explicitly."""
        clock: Final[Clock] = Clock()
        cache: Final[Cache] = Cache(timedelta(minutes=15), clock)
        cache.store(1, make_story(1))
        cache.store(2, None)
        clock.advance(timedelta(minutes=20))
        cache.store(3, make_story(3))

        self.assertEqual(cache.purge(), 2)
        self.assertEqual(len(cache), 1)
        _, found = cache.lookup(3)
        self.assertTrue(found)

        self.assertEqual(cache.purge(complete=True), 1)
        self.assertEqual(len(cache), 0)

    def test_07_concurrent(self) -> None:
        """Test hammering the Cache from several threads at once."""
        cache: Final[Cache] = Cache()
        errors: list[str] = []

        def worker(base: int) -> None:
            for i in range(200):
                key = base * 1000 + i
                cache.store(key, make_story(key))
                story, found = cache.lookup(key)
                if not found or story is None or story.item_id != key:
                    errors.append(f"Lookup of {key} failed")

        threads: Final[list[Thread]] = [Thread(target=worker, args=(n, )) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])
        self.assertEqual(len(cache), 1600)


class TestRWLock(unittest.TestCase):
    """Test the reader/writer lock."""

    def test_readers_share(self) -> None:
        """Test that several readers can hold the lock at the same time."""
        lock: Final[RWLock] = RWLock()
        with lock.read():
            with lock.read():
                self.assertEqual(lock._readers, 2)  # pylint: disable-msg=W0212
        self.assertEqual(lock._readers, 0)  # pylint: disable-msg=W0212

    def test_writer_excludes(self) -> None:
        """Test that a writer waits for readers to leave."""
        lock: Final[RWLock] = RWLock()
        log: list[str] = []

        def write() -> None:
            with lock.write():
                log.append("write")

        with lock.read():
            t = Thread(target=write)
            t.start()
            t.join(0.2)
            self.assertTrue(t.is_alive())
            log.append("read")

        t.join(2)
        self.assertFalse(t.is_alive())
        self.assertEqual(log, ["read", "write"])


# Local Variables: #
# python-indent: 4 #
# End: #
