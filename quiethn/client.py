#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 15:48:22 krylon>
#
# /data/code/python/quiethn/client.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the QuietHN news reader. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
quiethn.client

(c) 2026 Benjamin Walkenhorst

Client talks to the Hacker News API. There is no way to fetch several Items at
once, every Item has to be requested on its own.
"""


import logging
from typing import Any, Final, Optional, Union

import httpx

from quiethn import common
from quiethn.model import Item

default_base: Final[str] = "https://hacker-news.firebaseio.com/v0"
default_timeout: Final[float] = 10.0


class ClientError(common.QuietError):
    """Base class for errors talking to the API."""


class UpstreamUnavailable(ClientError):
    """The ranked list of top Items could not be retrieved."""


class ItemFetchError(ClientError):
    """A single Item could not be retrieved."""


class Client:
    """Client fetches top Item IDs and individual Items."""

    __slots__ = [
        "log",
        "base",
        "http",
    ]

    log: logging.Logger
    base: str
    http: httpx.Client

    def __init__(self,
                 base: str = default_base,
                 timeout: Union[int, float] = default_timeout,
                 transport: Optional[httpx.BaseTransport] = None) -> None:
        self.log = common.get_logger("client")
        self.base = base.rstrip("/")
        # httpx.Client is safe to share between threads.
        self.http = httpx.Client(base_url=self.base,
                                 timeout=timeout,
                                 transport=transport,
                                 headers={"User-Agent": f"{common.AppName}/{common.AppVersion}"})

    def close(self) -> None:
        """Close the underlying connection pool."""
        self.http.close()

    def __enter__(self) -> 'Client':
        return self

    def __exit__(self, _ex_type, _ex_val, _trace) -> None:
        self.close()

    def _get_json(self, path: str) -> Any:
        res: Final[httpx.Response] = self.http.get(path)
        res.raise_for_status()
        return res.json()

    def top_items(self) -> list[int]:
        """Return the IDs of the current top Items, best first."""
        try:
            data = self._get_json("/topstories.json")
        except (httpx.HTTPError, ValueError) as err:
            cname: Final[str] = err.__class__.__name__
            self.log.error("%s trying to load top stories from %s: %s",
                           cname,
                           self.base,
                           err)
            raise UpstreamUnavailable(f"Failed to load top stories: {err}") from err

        if not isinstance(data, list) or \
           not all(isinstance(x, int) and not isinstance(x, bool) for x in data):
            msg = f"Top stories from {self.base} are not a list of IDs"
            self.log.error(msg)
            raise UpstreamUnavailable(msg)

        return data

    def get_item(self, item_id: int) -> Item:
        """Fetch a single Item."""
        try:
            data = self._get_json(f"/item/{item_id}.json")
        except (httpx.HTTPError, ValueError) as err:
            cname: Final[str] = err.__class__.__name__
            raise ItemFetchError(f"{cname} trying to fetch Item {item_id}: {err}") from err

        if not isinstance(data, dict):
            raise ItemFetchError(f"Item {item_id} does not exist")

        try:
            return Item.from_json(data)
        except (KeyError, TypeError, ValueError) as err:
            raise ItemFetchError(f"Cannot decode Item {item_id}: {err}") from err

# Local Variables: #
# python-indent: 4 #
# End: #
