#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 17:03:50 krylon>
#
# /data/code/python/quiethn/engine.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the QuietHN news reader. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
quiethn.engine

(c) 2026 Benjamin Walkenhorst

Engine assembles the front page: It fetches Items concurrently, one worker
thread per rank slot, and whenever a slot's Item turns out not to be a story,
the slot is refilled with the next unused ID. The Stories come back ordered by
slot, no matter in which order the workers finish.
"""


import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from queue import Empty, SimpleQueue
from threading import Event, Thread
from typing import Final, Optional, Sequence, Union

from quiethn import common
from quiethn.cache import Cache
from quiethn.client import Client, ItemFetchError
from quiethn.model import Item, Story

default_count: Final[int] = 30


@dataclass(kw_only=True, slots=True)
class TopStories:
    """TopStories is the result of assembling the front page."""

    stories: list[Story] = field(default_factory=list)
    elapsed: timedelta = field(default_factory=timedelta)
    fetched: int = 0
    hits: int = 0
    complete: bool = True

    @property
    def elapsed_str(self) -> str:
        """Return the elapsed time in a human-readable form."""
        return f"{self.elapsed.total_seconds() * 1000:.1f} ms"


@dataclass(kw_only=True, slots=True, frozen=True)
class Completion:
    """Completion is what a worker reports back for its slot.

    A story of None means the slot has to be refilled.
    """

    rank: int
    item_id: int
    story: Optional[Story] = None
    hit: bool = False
    fetched: bool = False


class Engine:
    """Engine fetches the top Stories, using the Cache where it can."""

    __slots__ = [
        "log",
        "client",
        "cache",
        "deadline",
        "cache_rejects",
    ]

    log: logging.Logger
    client: Client
    cache: Cache
    deadline: Optional[timedelta]
    cache_rejects: bool

    def __init__(self,
                 client: Client,
                 cache: Cache,
                 deadline: Optional[Union[int, float, timedelta]] = None,
                 cache_rejects: bool = False) -> None:
        self.log = common.get_logger("engine")
        self.client = client
        self.cache = cache
        self.cache_rejects = cache_rejects
        match deadline:
            case None:
                self.deadline = None
            case int(x) | float(x):
                self.deadline = timedelta(seconds=x) if x > 0 else None
            case x if isinstance(x, timedelta):
                self.deadline = x if x > timedelta() else None
            case _:
                name = deadline.__class__.__name__
                msg = f"Deadline must be a number (of seconds) or a timedelta, not a {name}"
                raise TypeError(msg)

    def top_stories(self, count: int = default_count) -> TopStories:
        """Load the current top IDs and return the first <count> Stories among them.

        Raises UpstreamUnavailable if the list of top IDs cannot be loaded.
        """
        start: Final[datetime] = datetime.now()
        ids: Final[list[int]] = self.client.top_items()
        self.log.debug("Got %d top IDs", len(ids))
        res: Final[TopStories] = self.fetch_top_stories(ids, count, start)
        res.elapsed = datetime.now() - start
        return res

    def fetch_top_stories(self,
                          ids: Sequence[int],
                          count: int,
                          start: Optional[datetime] = None) -> TopStories:
        """Return the first <count> Stories among ids, in the order of ids.

        If ids hold fewer than <count> Stories, the result is shorter. If a
        deadline is set and expires, the Stories found so far are returned and
        the result is marked incomplete.
        """
        if count < 0:
            raise ValueError(f"Number of Stories must not be negative: {count}")
        if start is None:
            start = datetime.now()

        res: Final[TopStories] = TopStories()
        stories: dict[int, Story] = {}
        doneq: SimpleQueue = SimpleQueue()
        cancel: Final[Event] = Event()
        slots: Final[int] = min(count, len(ids))
        cursor: int = slots
        pending: int = 0

        for rank in range(slots):
            self._launch(rank, ids[rank], doneq, cancel)
            pending += 1

        try:
            while len(stories) < count and pending > 0:
                timeout: Optional[float] = None
                if self.deadline is not None:
                    timeout = (start + self.deadline - datetime.now()).total_seconds()
                    if timeout <= 0:
                        raise Empty

                done: Completion = doneq.get(True, timeout)
                pending -= 1
                if done.hit:
                    res.hits += 1
                if done.fetched:
                    res.fetched += 1

                if done.story is not None:
                    stories[done.rank] = done.story
                elif cursor < len(ids):
                    self._launch(done.rank, ids[cursor], doneq, cancel)
                    cursor += 1
                    pending += 1
                else:
                    self.log.debug("Slot %d stays empty, no IDs are left", done.rank)
        except Empty:
            self.log.warning("Deadline of %s expired with %d of %d Stories found",
                             self.deadline,
                             len(stories),
                             count)
            res.complete = False
        finally:
            cancel.set()

        # Slots that stayed empty leave gaps, close them.
        res.stories = [stories[r].ranked(i) for i, r in enumerate(sorted(stories))]
        res.elapsed = datetime.now() - start
        self.log.debug("Found %d of %d Stories in %s (%d fetched, %d cached, %d IDs used)",
                       len(res.stories),
                       count,
                       res.elapsed_str,
                       res.fetched,
                       res.hits,
                       cursor)
        return res

    def _launch(self, rank: int, item_id: int, out: SimpleQueue, cancel: Event) -> None:
        w: Thread = Thread(name=f"Fetch{rank:02d}",
                           target=self._fetch,
                           args=(rank, item_id, out, cancel),
                           daemon=True)
        w.start()

    def _fetch(self, rank: int, item_id: int, out: SimpleQueue, cancel: Event) -> None:
        """Fetch one Item for the given slot and report the result through out."""
        done: Completion = Completion(rank=rank, item_id=item_id)
        try:
            story, found = self.cache.lookup(item_id)
            if found:
                done = Completion(rank=rank,
                                  item_id=item_id,
                                  story=story.ranked(rank) if story is not None else None,
                                  hit=True)
                return

            if cancel.is_set():
                return

            # TODO Suppress duplicate fetches for IDs another request is already fetching.
            done = Completion(rank=rank, item_id=item_id, fetched=True)
            item: Final[Item] = self.client.get_item(item_id)

            if not item.is_story_link:
                if self.cache_rejects and not cancel.is_set():
                    self.cache.store(item_id, None)
                return

            story = Story.from_item(item)
            if not cancel.is_set():
                self.cache.store(item_id, story)
            done = Completion(rank=rank,
                              item_id=item_id,
                              story=story.ranked(rank),
                              fetched=True)
        except ItemFetchError as err:
            self.log.debug("Slot %d: %s", rank, err)
        except Exception as err:  # pylint: disable-msg=W0718
            cname: Final[str] = err.__class__.__name__
            self.log.error("%s trying to fetch Item %d for slot %d: %s",
                           cname,
                           item_id,
                           rank,
                           err)
        finally:
            out.put(done)

# Local Variables: #
# python-indent: 4 #
# End: #
