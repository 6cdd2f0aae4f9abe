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


from .errors import (
    CaptureTimeError,
    DateTimeParseError,
    ExifError,
    ImageError,
    RawError,
    RoleNotFoundError,
    TimestampNotFoundError,
    XmpError,
)
from .resolver import create_date, datetime_original, get_timestamp, resolve
from .types import CreateDate, DateTimeOriginal, Instant

__all__ = [
    "CaptureTimeError",
    "CreateDate",
    "DateTimeOriginal",
    "DateTimeParseError",
    "ExifError",
    "ImageError",
    "Instant",
    "RawError",
    "RoleNotFoundError",
    "TimestampNotFoundError",
    "XmpError",
    "create_date",
    "datetime_original",
    "get_timestamp",
    "resolve",
]
