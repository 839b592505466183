#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 15:11:04 krylon>
#
# /data/code/python/quiethn/cache.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the QuietHN news reader. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
quiethn.cache

(c) 2026 Benjamin Walkenhorst

In-memory cache for Stories, keyed by Item ID. Entries older than the TTL are
treated as missing, but they stay in the Cache until they are overwritten or
purge() is called explicitly.
"""


import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Condition, Lock
from typing import Callable, Final, Iterator, Optional, Union

from quiethn import common
from quiethn.model import Story

default_ttl: Final[timedelta] = timedelta(minutes=15)


class RWLock:
    """RWLock allows any number of concurrent readers, or a single writer."""

    __slots__ = [
        "_cond",
        "_readers",
        "_writing",
    ]

    _cond: Condition
    _readers: int
    _writing: bool

    def __init__(self) -> None:
        self._cond = Condition(Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock for shared access."""
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the lock for exclusive access."""
        with self._cond:
            while self._writing or self._readers > 0:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


@dataclass(kw_only=True, slots=True, frozen=True)
class CacheItem:
    """CacheItem is a cached Story plus the time it was stored.

    A story of None marks an Item that is known not to be a Story.
    """

    story: Optional[Story]
    since: datetime


class Cache:
    """Cache remembers Stories for a limited amount of time."""

    __slots__ = [
        "log",
        "lock",
        "ttl",
        "clock",
        "_store",
    ]

    log: logging.Logger
    lock: RWLock
    ttl: timedelta
    clock: Callable[[], datetime]
    _store: dict[int, CacheItem]

    def __init__(self,
                 ttl: Union[int, float, timedelta] = default_ttl,
                 clock: Callable[[], datetime] = datetime.now) -> None:
        self.log = common.get_logger("cache")
        self.lock = RWLock()
        self.clock = clock
        self._store = {}
        match ttl:
            case int(x) | float(x):
                self.ttl = timedelta(seconds=x)
            case x if isinstance(x, timedelta):
                self.ttl = x
            case _:
                name = ttl.__class__.__name__
                msg = f"TTL must be a number (of seconds) or a timedelta, not a {name}"
                raise TypeError(msg)

        self.log.debug("Cache keeps Stories for %s", self.ttl)

    def __len__(self) -> int:
        with self.lock.read():
            return len(self._store)

    def _valid(self, entry: CacheItem, now: datetime) -> bool:
        return now - entry.since < self.ttl

    def lookup(self, item_id: int) -> tuple[Optional[Story], bool]:
        """Look up the Story for item_id.

        The second value is True if a fresh entry exists. In that case, a first
        value of None means the Item is known not to be a Story. Expired
        entries are reported as missing, but are not removed.
        """
        with self.lock.read():
            entry: Optional[CacheItem] = self._store.get(item_id)

        if entry is None or not self._valid(entry, self.clock()):
            return None, False
        return entry.story, True

    def store(self, item_id: int, story: Optional[Story]) -> None:
        """Store story under item_id, replacing any previous entry."""
        entry: Final[CacheItem] = CacheItem(story=story, since=self.clock())
        with self.lock.write():
            self._store[item_id] = entry

    def purge(self, complete: bool = False) -> int:
        """Remove stale entries from the Cache. If <complete> is True, remove ALL entries.

        Return the number of entries removed.
        """
        now: Final[datetime] = self.clock()
        with self.lock.write():
            stale: list[int] = [k for k, v in self._store.items()
                                if complete or not self._valid(v, now)]
            for key in stale:
                del self._store[key]
            remaining: int = len(self._store)

        self.log.debug("Purged %d of %d entries from the cache",
                       len(stale),
                       len(stale) + remaining)
        return len(stale)

# Local Variables: #
# python-indent: 4 #
# End: #
