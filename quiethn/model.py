#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 14:20:37 krylon>
#
# /data/code/python/quiethn/model.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the QuietHN news reader. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
quiethn.model

(c) 2026 Benjamin Walkenhorst
"""


from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Final, Optional
from urllib.parse import urlsplit

from quiethn import common

story_type: Final[str] = "story"


@dataclass(kw_only=True, slots=True, frozen=True)
class Item:
    """Item is an entry in the item graph, as returned by the API."""

    item_id: int
    kind: str = ""
    by: str = ""
    title: str = ""
    url: str = ""
    text: str = ""
    score: int = 0
    descendants: int = 0
    timestamp: Optional[datetime] = None
    kids: tuple[int, ...] = field(default_factory=tuple)
    deleted: bool = False
    dead: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> 'Item':
        """Create an Item from the decoded JSON record the API delivers."""
        stamp: Optional[datetime] = None
        if "time" in data:
            stamp = datetime.fromtimestamp(int(data["time"]))

        return cls(
            item_id=int(data["id"]),
            kind=data.get("type") or "",
            by=data.get("by") or "",
            title=data.get("title") or "",
            url=data.get("url") or "",
            text=data.get("text") or "",
            score=int(data.get("score") or 0),
            descendants=int(data.get("descendants") or 0),
            timestamp=stamp,
            kids=tuple(data.get("kids") or ()),
            deleted=bool(data.get("deleted", False)),
            dead=bool(data.get("dead", False)),
        )

    @property
    def is_story_link(self) -> bool:
        """Return True if the Item is a story that points to an external URL."""
        return self.kind == story_type and self.url != ""

    @property
    def stamp_str(self) -> str:
        """Return the Item's timestamp as a human-readable string."""
        if self.timestamp is None:
            return ""
        return self.timestamp.strftime(common.TimeFmt)


def extract_host(url: str) -> str:
    """Return the hostname of url without a leading "www.".

    If the URL cannot be parsed or has no hostname, return an empty string.
    """
    try:
        host: Optional[str] = urlsplit(url).hostname
    except ValueError:
        return ""

    if host is None:
        return ""
    return host.removeprefix("www.")


@dataclass(kw_only=True, slots=True, frozen=True)
class Story:
    """Story is an Item that qualified for the front page.

    The rank belongs to the slot the Story fills in one particular response,
    not to the Story itself, so Stories taken from the cache get re-ranked.
    """

    item: Item
    host: str = ""
    rank: int = -1

    @classmethod
    def from_item(cls, item: Item, rank: int = -1) -> 'Story':
        """Create a Story from an Item, deriving the host from its URL."""
        return cls(item=item, host=extract_host(item.url), rank=rank)

    def ranked(self, rank: int) -> 'Story':
        """Return a copy of the Story that occupies the given rank."""
        return replace(self, rank=rank)

    @property
    def item_id(self) -> int:
        """Return the ID of the underlying Item."""
        return self.item.item_id

    @property
    def title(self) -> str:
        """Return the title of the underlying Item."""
        return self.item.title

    @property
    def url(self) -> str:
        """Return the URL of the underlying Item."""
        return self.item.url

# Local Variables: #
# python-indent: 4 #
# End: #
