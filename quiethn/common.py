#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-19 14:02:11 krylon>
#
# /data/code/python/quiethn/common.py
# created on 19. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the QuietHN news reader. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
quiethn.common

(c) 2026 Benjamin Walkenhorst

Constants, paths and logging shared by all parts of the application.
"""


import logging
import logging.handlers
import os
import pathlib
from threading import Lock
from typing import Final, Optional, Union

AppName: Final[str] = "QuietHN"
AppVersion: Final[str] = "0.1.0"
Debug: bool = False
TimeFmt: Final[str] = "%Y-%m-%d %H:%M:%S"


class QuietError(Exception):
    """Base class for application-specific exceptions."""


class Path:
    """Path holds the filesystem locations the application uses."""

    __slots__ = ["__base"]

    __base: pathlib.Path

    def __init__(self, root: Union[str, pathlib.Path]) -> None:
        self.__base = pathlib.Path(root)

    def base(self, path: Optional[Union[str, pathlib.Path]] = None) -> pathlib.Path:
        """Return, and optionally set, the base directory."""
        if path is not None:
            self.__base = pathlib.Path(path)
        return self.__base

    @property
    def log(self) -> pathlib.Path:
        """Return the path of the log file."""
        return self.__base.joinpath(f"{AppName.lower()}.log")


path: Path = Path(os.path.expanduser(f"~/.{AppName.lower()}.d"))

_lock: Final[Lock] = Lock()
_file_handler: Optional[logging.Handler] = None
_console_handler: Optional[logging.Handler] = None


def set_basedir(folder: Union[str, pathlib.Path]) -> None:
    """Set the base directory and make sure it exists.

    Loggers obtained afterwards also write to a log file in that directory.
    """
    global _file_handler  # pylint: disable-msg=W0603
    base: Final[pathlib.Path] = path.base(folder)
    base.mkdir(parents=True, exist_ok=True)

    with _lock:
        handler = logging.handlers.RotatingFileHandler(path.log,
                                                       maxBytes=(1 << 22),
                                                       backupCount=3)
        handler.setFormatter(_formatter())
        root = logging.getLogger(AppName.lower())
        if _file_handler is not None:
            root.removeHandler(_file_handler)
            _file_handler.close()
        root.addHandler(handler)
        _file_handler = handler


def _formatter() -> logging.Formatter:
    return logging.Formatter("%(asctime)s (%(name)-16s / line %(lineno)-4d) "
                             + "- %(levelname)-8s %(message)s",
                             TimeFmt)


def get_logger(name: str) -> logging.Logger:
    """Create and return a logger with the given name.

    All loggers are children of the application's root logger, which writes to
    the console and, once set_basedir was called, to the log file.
    """
    global _console_handler  # pylint: disable-msg=W0603
    root = logging.getLogger(AppName.lower())
    with _lock:
        if _console_handler is None:
            _console_handler = logging.StreamHandler()
            _console_handler.setFormatter(_formatter())
            root.addHandler(_console_handler)
        root.setLevel(logging.DEBUG if Debug else logging.INFO)

    return root.getChild(name)

# Local Variables: #
# python-indent: 4 #
# End: #
