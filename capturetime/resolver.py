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
from pathlib import Path

from . import xmp
from .errors import CaptureTimeError, RoleNotFoundError
from .handlers import ExifHandler, RawHandler, XmpSidecarHandler, vendor_create_date
from .types import CreateDate, DateTimeOriginal, Instant, Role

_LOGGER = logging.getLogger(__name__)

DATETIME_ORIGINAL = Role(
    name="DateTimeOriginal",
    exif_tag=0x9003,
    xmp_key=xmp.EXIF_DATETIMEORIGINAL,
    wrapper=DateTimeOriginal,
)

CREATE_DATE = Role(
    name="CreateDate",
    exif_tag=0x0132,
    xmp_key=xmp.XMP_CREATEDATE,
    wrapper=CreateDate,
    raw_fallback=vendor_create_date,
)

# Most trusted first: an explicit sidecar edit, then embedded exif, then
# whatever can be dug out of the RAW container
SOURCES = (XmpSidecarHandler, ExifHandler, RawHandler)


def _attempt(handler_cls, role: Role, filepath: Path) -> Instant | None:
    try:
        return handler_cls(filepath).get(role)
    except (CaptureTimeError, OSError) as e:
        _LOGGER.debug(f"{filepath}: {handler_cls.__name__} {role.name}: {e}")
        return None


def resolve(role: Role, filepath: Path) -> Instant:
    filepath = Path(filepath)

    for handler_cls in SOURCES:
        instant = _attempt(handler_cls, role, filepath)
        if instant is None:
            continue

        return role.wrapper(time=instant.time, offset=instant.offset, ms=instant.ms)

    raise RoleNotFoundError(role.name)


def datetime_original(filepath: Path) -> DateTimeOriginal:
    return resolve(DATETIME_ORIGINAL, filepath)


def create_date(filepath: Path) -> CreateDate:
    return resolve(CREATE_DATE, filepath)


def get_timestamp(filepath: Path) -> int:
    """Best-effort capture time of a file, as wall clock seconds"""
    try:
        return datetime_original(filepath).to_original()
    except RoleNotFoundError:
        return create_date(filepath).to_original()
