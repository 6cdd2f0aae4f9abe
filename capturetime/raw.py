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
import struct
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

import dateutil.tz
import exifread

from .errors import RawError
from .types import EXIF_FORMAT

_LOGGER = logging.getLogger(__name__)

# exifread is very chatty on unknown tags
logging.getLogger("exifread").setLevel(logging.ERROR)

# TIFF based containers: plain TIFF header (ARW, NEF, CR2, DNG, PEF...),
# Olympus ORF and Panasonic RW2 variants
RAW_MAGICS = (b"II*\x00", b"MM\x00*", b"IIRO", b"MMOR", b"IIU\x00")

XMP_TAG = 0x02BC
MAKERNOTE_PREFIX = "MakerNote "
TIMESTAMP_TAGS = ("EXIF DateTimeOriginal", "Image DateTime")
FIELD_IFDS = ("Image", "EXIF")

# Maker note entries exifread has no name for, by make
VENDOR_MAKERNOTE_TAGS = {
    "SONY": {0x0006: "SonyDateTime"},
}


class RawImage:
    """
    Snapshot of the metadata stored in a RAW container.

    All the decoding happens in open_raw(), instances don't hold any file
    handle and are never modified after being built.
    """

    def __init__(self, filepath: Path, tags: dict, xmp: bytes | None = None):
        self.filepath = filepath
        self._tags = dict(tags)
        self._xmp = xmp

    @property
    def make(self) -> str:
        return str(self._tags.get("Image Make", "")).strip()

    def xmp_bytes(self) -> bytes:
        if not self._xmp:
            raise RawError(f"{self.filepath}: no embedded xmp packet")

        return self._xmp

    def maker_notes(self) -> dict[str, str]:
        vendor_names = {}
        for make, names in VENDOR_MAKERNOTE_TAGS.items():
            if make in self.make.upper():
                vendor_names.update(names)

        notes = {}
        for name, tag in self._tags.items():
            if not name.startswith(MAKERNOTE_PREFIX):
                continue

            name = name[len(MAKERNOTE_PREFIX) :]
            name = vendor_names.get(getattr(tag, "tag", None), name)
            notes[name] = str(tag)

        return notes

    def generic_timestamp(self) -> int:
        """
        Container timestamp as epoch seconds, reading the recorded wall clock
        as local time. 0 when the container doesn't have one.
        """
        for name in TIMESTAMP_TAGS:
            tag = self._tags.get(name)
            if tag is None:
                continue

            try:
                dt = datetime.strptime(str(tag).strip(), EXIF_FORMAT)
            except ValueError:
                _LOGGER.debug(f"{self.filepath}: unparseable {name} '{tag}'")
                continue

            return int(dt.replace(tzinfo=dateutil.tz.tzlocal()).timestamp())

        return 0

    def exif_fields(self) -> dict[int, str]:
        """
        Fields from the main image and EXIF directories. Thumbnail, sub-IFD
        and maker note entries reuse the same ids and are left out.
        """
        fields = {}
        for name, tag in self._tags.items():
            ifd, _, tagname = name.partition(" ")
            if ifd not in FIELD_IFDS or tagname.startswith("SubIFD"):
                continue
            if not isinstance(getattr(tag, "tag", None), int):
                continue

            fields.setdefault(tag.tag, str(tag))

        return fields


def _extract_xmp(fh: BinaryIO, tags: dict) -> bytes | None:
    for tag in tags.values():
        if getattr(tag, "tag", None) != XMP_TAG:
            continue

        if isinstance(tag.values, bytes):
            return tag.values
        if isinstance(tag.values, str):
            return tag.values.encode("utf-8")
        if tag.values:
            return bytes(tag.values)

        # exifread drops long values. Offsets are relative to the TIFF
        # header, which is the start of the file in TIFF based containers
        if tag.field_length:
            fh.seek(tag.field_offset)
            return fh.read(tag.field_length)

    return None


def open_raw(filepath: Path) -> RawImage:
    with filepath.open("rb") as fh:
        if fh.read(4) not in RAW_MAGICS:
            raise RawError(f"{filepath}: unsupported container")

        fh.seek(0)
        try:
            tags = exifread.process_file(fh, details=True)
            xmp = _extract_xmp(fh, tags)
        except (ValueError, IndexError, KeyError, struct.error) as e:
            raise RawError(f"{filepath}: corrupt container: {e}") from e

    if not tags:
        raise RawError(f"{filepath}: unsupported container")

    return RawImage(filepath, tags, xmp=xmp)
