#!/usr/bin/env python3

# Copyright (C) 2022 Luis López <luis@cuarentaydos.com>
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License
# as published by the Free Software Foundation; either version 2
# of the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301,
# USA.


import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

_LOGGER = logging.getLogger(__name__)


def walk_files(dirpath: Path) -> Iterator[Path]:
    if not dirpath.is_dir():
        raise NotADirectoryError(dirpath)

    for root, dirs, files in os.walk(dirpath.as_posix()):
        dirs.sort()
        rootp = Path(root)
        yield from (rootp / x for x in sorted(files))


def iter_files_in_targets(
    targets,
    *,
    recursive: bool = False,
    exclude_suffixes: tuple[str, ...] = (),
    error_handler: Callable[[str], None] | None = None,
) -> Iterator[Path]:
    def _error_handler(msg):
        _LOGGER.warning(msg)

    def _excluded(item: Path) -> bool:
        return item.suffix.lower() in exclude_suffixes

    error_handler = error_handler or _error_handler

    for item in targets:
        if not item.exists():
            error_handler(f"{item.as_posix()}: no such file or directory")

        elif item.is_file():
            yield item

        elif item.is_dir():
            if recursive:
                yield from (x for x in walk_files(item) if not _excluded(x))

            else:
                error_handler(f"{item.as_posix()}: Is a directory, use --recursive?")

        else:
            error_handler(f"{item.as_posix()}: unknown type")
