#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 18:12:45 krylon>
#
# /data/code/python/quiethn/web.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the QuietHN news reader. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
quiethn.web

(c) 2026 Benjamin Walkenhorst
"""


import json
import logging
import pathlib
import socket
from datetime import datetime
from typing import Any, Final, Union

import bottle
from bottle import response
from jinja2 import Environment, FileSystemLoader, TemplateError

from quiethn import common
from quiethn.client import UpstreamUnavailable
from quiethn.engine import Engine, TopStories, default_count

tmpl_root: Final[pathlib.Path] = pathlib.Path(__file__).parent.joinpath("templates")


class WebUI:
    """Present a shiny face to the casual observer."""

    __slots__ = [
        "log",
        "engine",
        "env",
        "app",
        "host",
        "port",
        "count",
    ]

    log: logging.Logger
    engine: Engine
    env: Environment
    app: bottle.Bottle
    host: str
    port: int
    count: int

    def __init__(self,
                 engine: Engine,
                 host: str = "localhost",
                 port: int = 3000,
                 count: int = default_count) -> None:
        self.log = common.get_logger("web")
        self.log.info("Web interface is coming up...")

        if count <= 0:
            raise ValueError(f"Number of Stories must be positive, not {count}")

        self.engine = engine
        self.host = host
        self.port = port
        self.count = count

        self.env = Environment(loader=FileSystemLoader(str(tmpl_root)),
                               autoescape=True)
        self.env.globals = {
            "dbg": common.Debug,
            "app_string": f"{common.AppName} {common.AppVersion}",
            "hostname": socket.gethostname(),
        }

        bottle.debug(common.Debug)
        self.app = bottle.Bottle()
        self.app.route("/", callback=self._handle_main)
        self.app.route("/ajax/beacon", callback=self._handle_beacon)
        self.app.route("/ajax/cache/purge",
                       method="POST",
                       callback=self._handle_cache_purge)

    def _tmpl_vars(self) -> dict:
        """Return a dict with a few default variables filled in already."""
        default: dict = {
            "now": datetime.now().strftime(common.TimeFmt),
            "year": datetime.now().year,
            "time_fmt": common.TimeFmt,
        }

        return default

    def run(self) -> None:
        """Run the web server."""
        self.app.run(host=self.host, port=self.port, debug=common.Debug)

    def _handle_main(self) -> Union[str, bytes]:
        """Present the top Stories."""
        response.set_header("Cache-Control", "no-store, max-age=0")
        try:
            top: Final[TopStories] = self.engine.top_stories(self.count)
        except UpstreamUnavailable as err:
            self.log.error("Cannot render front page: %s", err)
            response.status = 500
            return "Failed to load top stories"

        try:
            tmpl = self.env.get_template("index.jinja")
            tmpl_vars = self._tmpl_vars()
            tmpl_vars["title"] = f"{common.AppName} {common.AppVersion} - Top Stories"
            tmpl_vars["stories"] = top.stories
            tmpl_vars["top"] = top
            return tmpl.render(tmpl_vars)
        except TemplateError as err:
            cname: Final[str] = err.__class__.__name__
            self.log.error("%s rendering front page: %s", cname, err)
            response.status = 500
            return "Failed to process the template"

    # AJAX Handlers

    def _handle_beacon(self) -> str:
        """Handle the AJAX call for the beacon."""
        jdata: dict[str, Any] = {
            "Status": True,
            "Message": common.AppName,
            "Timestamp": datetime.now().strftime(common.TimeFmt),
            "Hostname": socket.gethostname(),
            "Cached": len(self.engine.cache),
        }

        response.set_header("Content-Type", "application/json")
        response.set_header("Cache-Control", "no-store, max-age=0")

        return json.dumps(jdata)

    def _handle_cache_purge(self) -> str:
        """Remove stale entries from the Cache."""
        cnt: Final[int] = self.engine.cache.purge()
        self.log.info("Purged %d stale entries from the cache", cnt)
        res: Final[dict[str, Any]] = {
            "status": True,
            "message": "ACK",
            "timestamp": datetime.now().strftime(common.TimeFmt),
            "purged": cnt,
        }

        response.set_header("Content-Type", "application/json")
        response.set_header("Cache-Control", "no-store, max-age=0")
        return json.dumps(res)

# Local Variables: #
# python-indent: 4 #
# End: #
