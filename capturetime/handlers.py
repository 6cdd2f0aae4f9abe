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


import abc
import io
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import BinaryIO

import dateutil.tz

from . import exif, raw, xmp
from .errors import DateTimeParseError, RawError, TimestampNotFoundError, XmpError
from .types import DISPLAY_FORMAT, EXIF_FORMAT, Instant, Role

_LOGGER = logging.getLogger(__name__)

SIDECAR_SUFFIX = ".xmp"
VENDOR_RAW_SUFFIX = ".arw"
SONY_DATETIME_FIELD = "SonyDateTime"


def parse_fixed(text: str, fmt: str) -> Instant:
    text = text.strip()
    delta = timedelta()

    # Some cameras use hour '24' incorrectly.
    # Quoting python bugtracker:
    # > Indeed anything beyond 24:0:0 is invalid
    if text.find(" 24:") > 0:
        text = text.replace(" 24:", " 00:")
        delta += timedelta(days=1)

    try:
        dt = datetime.strptime(text, fmt)
    except ValueError as e:
        raise DateTimeParseError(f"'{text}' doesn't match '{fmt}'") from e

    return Instant.from_datetime(dt + delta)


def xmp_instant(stream: BinaryIO, key: str) -> Instant:
    document = xmp.load(stream)

    for description in xmp.get_descriptions(document):
        try:
            text = xmp.get_item(description, key)
        except XmpError:
            continue

        return Instant.parse(text)

    raise TimestampNotFoundError(key)


class _BaseHandler:
    def __init__(self, filepath: Path):
        self.filepath = filepath.absolute()

    @abc.abstractmethod
    def get(self, role: Role) -> Instant:
        raise NotImplementedError()


class XmpSidecarHandler(_BaseHandler):
    @property
    def sidecar(self) -> Path:
        return self.filepath.with_suffix(SIDECAR_SUFFIX)

    def get(self, role: Role) -> Instant:
        with self.sidecar.open("rb") as fh:
            return xmp_instant(fh, role.xmp_key)


class ExifHandler(_BaseHandler):
    def get(self, role: Role) -> Instant:
        with self.filepath.open("rb") as fh:
            fields = exif.read(fh)

        for field in fields:
            if field.tag == role.exif_tag:
                return parse_fixed(field.text, DISPLAY_FORMAT)

        raise TimestampNotFoundError(f"exif tag 0x{role.exif_tag:04x} not found")


class RawHandler(_BaseHandler):
    def get(self, role: Role) -> Instant:
        img = raw.open_raw(self.filepath)

        try:
            return xmp_instant(io.BytesIO(img.xmp_bytes()), role.xmp_key)

        except (RawError, XmpError, TimestampNotFoundError) as e:
            if role.raw_fallback is None:
                raise

            _LOGGER.debug(f"{self.filepath}: embedded xmp failed ({e}), guessing")
            return role.raw_fallback(self.filepath, img)


def is_vendor_raw(filepath: Path) -> bool:
    return filepath.suffix.lower() == VENDOR_RAW_SUFFIX


def sony_time(text: str) -> int | None:
    try:
        return parse_fixed(text, EXIF_FORMAT).to_utc()
    except DateTimeParseError:
        return None


def utc_minus_local() -> int:
    offset = datetime.now(dateutil.tz.tzlocal()).utcoffset() or timedelta()
    return -int(offset.total_seconds())


def vendor_create_date(filepath: Path, img: raw.RawImage) -> Instant:
    """
    Best effort CreateDate for RAW files without usable embedded XMP.

    Sony ARW files carry the date in their maker notes. Everything else
    falls back to the container timestamp, shifted with the current local
    offset (not the one in effect when the picture was taken).
    This never fails, the result can be 0.
    """
    if is_vendor_raw(filepath):
        notes = img.maker_notes()
        if stamp := sony_time(notes.get(SONY_DATETIME_FIELD, "")):
            return Instant(stamp)

    return Instant(img.generic_timestamp() - utc_minus_local())
