#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 18:41:17 krylon>
#
# /data/code/python/quiethn/main.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the QuietHN news reader. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
quiethn.main

(c) 2026 Benjamin Walkenhorst
"""


import argparse
import logging
import pathlib
from typing import Final, Optional, Sequence

from quiethn import common
from quiethn.cache import Cache, default_ttl
from quiethn.client import Client, default_base, default_timeout
from quiethn.engine import Engine, default_count
from quiethn.web import WebUI


def positive_int(txt: str) -> int:
    """Parse a strictly positive integer from the command line."""
    val: Final[int] = int(txt)
    if val <= 0:
        raise argparse.ArgumentTypeError(f"{txt} is not a positive number")
    return val


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse the command line."""
    argp: argparse.ArgumentParser = argparse.ArgumentParser(prog=common.AppName.lower())
    argp.add_argument("-a", "--address",
                      default="localhost",
                      help="The IP address(es) or hostname to listen on")
    argp.add_argument("-p", "--port",
                      type=int,
                      default=3000,
                      help="The port to start the web server on")
    argp.add_argument("-n", "--num-stories",
                      type=positive_int,
                      default=default_count,
                      help="The number of top stories to display")
    argp.add_argument("-t", "--ttl",
                      type=float,
                      default=default_ttl.total_seconds(),
                      help="The number of seconds to keep Stories in the cache")
    argp.add_argument("-d", "--deadline",
                      type=float,
                      default=0,
                      help="Give up on loading the front page after that many seconds "
                      + "(0 means wait for all Stories)")
    argp.add_argument("-r", "--cache-rejects",
                      action="store_true",
                      help="Also remember Items that are not Stories")
    argp.add_argument("-b", "--basedir",
                      type=pathlib.Path,
                      default=common.path.base(),
                      help="The directory to store the log file in")
    argp.add_argument("--api",
                      default=default_base,
                      help="The base URL of the Hacker News API")
    argp.add_argument("--http-timeout",
                      type=float,
                      default=default_timeout,
                      help="Timeout in seconds for a single API request")
    argp.add_argument("--debug",
                      action="store_true",
                      help="Enable debug output")

    return argp.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Run the QuietHN web server."""
    args = parse_args(argv)

    common.Debug = args.debug
    common.set_basedir(args.basedir)
    log: Final[logging.Logger] = common.get_logger("main")

    client: Final[Client] = Client(args.api, args.http_timeout)
    cache: Final[Cache] = Cache(args.ttl)
    eng: Final[Engine] = Engine(client, cache, args.deadline, args.cache_rejects)
    srv: Final[WebUI] = WebUI(eng, args.address, args.port, args.num_stories)

    log.info("Serving %d top stories on http://%s:%d/",
             args.num_stories,
             args.address,
             args.port)

    try:
        srv.run()
    except KeyboardInterrupt:
        print("Quitting now, bye!")
    finally:
        client.close()

    print("So long, and thanks for all the fish.")


if __name__ == '__main__':
    main()


# Local Variables: #
# python-indent: 4 #
# End: #
