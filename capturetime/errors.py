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


class CaptureTimeError(Exception):
    pass


class ExifError(CaptureTimeError):
    pass


class XmpError(CaptureTimeError):
    pass


class DateTimeParseError(CaptureTimeError, ValueError):
    pass


class RawError(CaptureTimeError):
    pass


class ImageError(CaptureTimeError):
    pass


class TimestampNotFoundError(CaptureTimeError):
    pass


class RoleNotFoundError(TimestampNotFoundError):
    def __init__(self, role: str):
        super().__init__(role)
        self.role = role

    def __str__(self) -> str:
        return f"{self.role} not found"
