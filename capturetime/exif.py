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


import io
import logging
import re
import struct
from typing import BinaryIO, NamedTuple

import piexif
from PIL import ExifTags, Image, UnidentifiedImageError

from .errors import ExifError, ImageError

_LOGGER = logging.getLogger(__name__)

DATETIME_TAGS = {
    piexif.ImageIFD.DateTime,
    piexif.ExifIFD.DateTimeOriginal,
    piexif.ExifIFD.DateTimeDigitized,
}

_PIEXIF_IFDS = ("0th", "Exif", "GPS", "Interop", "1st")
_EXIF_DATETIME_RE = re.compile(r"^(\d{4}):(\d{2}):(\d{2}) (\d{2}:\d{2}:\d{2})$")


class ExifField(NamedTuple):
    tag: int
    text: str


def read(stream: BinaryIO) -> list[ExifField]:
    """
    Read every EXIF field from an image container.

    JPEG, TIFF and WebP containers are handled by piexif, anything else is
    handed to Pillow. Date tags are rendered as 'YYYY-MM-DD HH:MM:SS'.
    """
    data = stream.read()

    if _is_piexif_container(data):
        return list(_read_with_piexif(data))
    else:
        return list(_read_with_pillow(data))


def display_value(tag: int, value) -> str:
    if isinstance(value, bytes):
        text = value.decode("ascii", errors="replace")
    elif isinstance(value, tuple) and len(value) == 2 and all(
        isinstance(x, int) for x in value
    ):
        text = f"{value[0]}/{value[1]}"
    else:
        text = str(value)

    text = text.rstrip("\x00").strip()

    if tag in DATETIME_TAGS:
        if m := _EXIF_DATETIME_RE.match(text):
            year, month, day, time = m.groups()
            text = f"{year}-{month}-{day} {time}"

    return text


def _is_piexif_container(data: bytes) -> bool:
    return (
        data[0:2] == b"\xff\xd8"
        or data[0:4] in (b"II*\x00", b"MM\x00*")
        or (data[0:4] == b"RIFF" and data[8:12] == b"WEBP")
    )


def _read_with_piexif(data: bytes):
    try:
        exif = piexif.load(data)
    except (piexif.InvalidImageDataError, ValueError, KeyError, struct.error) as e:
        raise ExifError(f"unable to read exif container: {e}") from e

    for ifd in _PIEXIF_IFDS:
        for tag, value in (exif.get(ifd) or {}).items():
            yield ExifField(tag, display_value(tag, value))


def _read_with_pillow(data: bytes):
    try:
        with Image.open(io.BytesIO(data)) as img:
            exif = img.getexif()
            fields = list(exif.items())
            fields.extend(exif.get_ifd(ExifTags.IFD.Exif).items())

    except (UnidentifiedImageError, OSError) as e:
        raise ImageError(f"unsupported image container: {e}") from e

    _LOGGER.debug(f"read {len(fields)} exif fields with Pillow")

    for tag, value in fields:
        yield ExifField(tag, display_value(tag, value))
