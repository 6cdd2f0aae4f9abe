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


from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import dateutil.parser
import dateutil.tz

from .errors import TimestampNotFoundError

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"
EXIF_FORMAT = "%Y:%m:%d %H:%M:%S"


@dataclass(frozen=True)
class Instant:
    """
    An absolute point in time plus the offset the source recorded it with.

    `time` is always UTC seconds. `offset` is "local minus UTC" in seconds,
    `None` when the source doesn't carry one (bare wall-clock values are
    stored as if they were UTC).
    """

    time: int
    offset: int | None = None
    ms: int | None = None

    def to_utc(self) -> int:
        return self.time

    def to_original(self) -> int:
        return self.time + (self.offset or 0)

    def format(self) -> str:
        # to_original() is already the local wall clock
        dt = datetime.fromtimestamp(self.to_original(), tz=dateutil.tz.UTC)
        return dt.strftime(DISPLAY_FORMAT)

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def parse(cls, text: str) -> "Instant":
        text = text.strip()

        try:
            dt = dateutil.parser.isoparse(text)
        except ValueError:
            try:
                dt = datetime.strptime(text, EXIF_FORMAT)
            except ValueError as e:
                raise TimestampNotFoundError(text) from e

        return cls.from_datetime(dt)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        dt = dt.replace(microsecond=0)

        utcoffset = dt.utcoffset()
        if utcoffset is None:
            return cls(time=int(dt.replace(tzinfo=dateutil.tz.UTC).timestamp()))

        return cls(time=int(dt.timestamp()), offset=int(utcoffset.total_seconds()))


class DateTimeOriginal(Instant):
    """When the shutter fired"""


class CreateDate(Instant):
    """When the file (or a derivative of it) was created"""


RawFallback = Callable[[Path, Any], Instant]


@dataclass(frozen=True)
class Role:
    name: str
    exif_tag: int
    xmp_key: str
    wrapper: type[Instant]
    raw_fallback: RawFallback | None = None
