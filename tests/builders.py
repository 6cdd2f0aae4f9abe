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


import struct
from pathlib import Path

import piexif
from PIL import Image

from capturetime.errors import RawError

XMP_TEMPLATE = """<?xpacket begin="﻿" id="W5M0MpCehiHzreSzNTczkc9d"?>
<x:xmpmeta xmlns:x="adobe:ns:meta/">
 <rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">
  <rdf:Description rdf:about=""
    xmlns:xmp="http://ns.adobe.com/xap/1.0/"
    xmlns:exif="http://ns.adobe.com/exif/1.0/"
    {attrs}/>
 </rdf:RDF>
</x:xmpmeta>
<?xpacket end="w"?>"""


def xmp_document(
    datetime_original: str | None = None, create_date: str | None = None
) -> str:
    attrs = []
    if datetime_original is not None:
        attrs.append(f'exif:DateTimeOriginal="{datetime_original}"')
    if create_date is not None:
        attrs.append(f'xmp:CreateDate="{create_date}"')

    return XMP_TEMPLATE.format(attrs="\n    ".join(attrs))


def write_sidecar(filepath: Path, **kwargs) -> Path:
    sidecar = filepath.with_suffix(".xmp")
    sidecar.write_text(xmp_document(**kwargs), encoding="utf-8")
    return sidecar


def write_jpeg(filepath: Path, exif: dict | None = None) -> Path:
    Image.new("RGB", (8, 8), color=(128, 64, 32)).save(filepath, "JPEG")
    if exif:
        piexif.insert(piexif.dump(exif), filepath.as_posix())

    return filepath


def write_tiff_raw(
    filepath: Path,
    *,
    datetime: str | None = None,
    datetime_original: str | None = None,
    xmp: str | None = None,
    make: str = "SONY",
) -> Path:
    """
    Write a TIFF-structured file, the layout most RAW containers (ARW, NEF,
    DNG...) share. It carries no image data, only metadata.
    """
    zeroth = {piexif.ImageIFD.Make: make}
    if datetime is not None:
        zeroth[piexif.ImageIFD.DateTime] = datetime
    if xmp is not None:
        zeroth[piexif.ImageIFD.XMLPacket] = xmp.encode("utf-8")

    exif = {}
    if datetime_original is not None:
        exif[piexif.ExifIFD.DateTimeOriginal] = datetime_original

    data = piexif.dump({"0th": zeroth, "Exif": exif})
    # Drop the "Exif\x00\x00" APP1 header, the rest is a plain TIFF
    filepath.write_bytes(data[6:])
    return filepath


_ASCII, _LONG, _UNDEFINED = 2, 4, 7


def _ascii(text: str) -> bytes:
    return text.encode("ascii") + b"\x00"


def _ifd_size(entries) -> int:
    data = sum(len(payload) for *_, payload in entries if len(payload) > 4)
    return 2 + 12 * len(entries) + 4 + data


def _ifd(offset: int, entries) -> bytes:
    """
    Little endian IFD laid out at 'offset', values longer than 4 bytes are
    stored right after it. entries are (tag, type, payload) sorted by tag.
    """
    data_offset = offset + 2 + 12 * len(entries) + 4
    head = struct.pack("<H", len(entries))
    data = b""

    for tag, kind, payload in entries:
        count = len(payload) // 4 if kind == _LONG else len(payload)
        if len(payload) <= 4:
            head += struct.pack("<HHI", tag, kind, count) + payload.ljust(4, b"\x00")
        else:
            head += struct.pack("<HHII", tag, kind, count, data_offset + len(data))
            data += payload

    return head + struct.pack("<I", 0) + data


def write_sony_raw(
    filepath: Path, *, sony_datetime: str, datetime: str | None = None
) -> Path:
    """
    Write a TIFF with a Sony style maker note: an IFD with absolute offsets
    holding the date entry.
    """
    zeroth = [(piexif.ImageIFD.Make, _ASCII, _ascii("SONY"))]
    if datetime is not None:
        zeroth.append((piexif.ImageIFD.DateTime, _ASCII, _ascii(datetime)))
    zeroth.append((piexif.ImageIFD.ExifTag, _LONG, b"\x00" * 4))

    exif_offset = 8 + _ifd_size(zeroth)
    zeroth[-1] = (piexif.ImageIFD.ExifTag, _LONG, struct.pack("<I", exif_offset))

    # The maker note is the only entry of the EXIF IFD, so its value starts
    # right after the IFD header, entry and next pointer
    note_offset = exif_offset + 2 + 12 + 4
    note = _ifd(note_offset, [(0x0006, _ASCII, _ascii(sony_datetime))])
    exif = [(piexif.ExifIFD.MakerNote, _UNDEFINED, note)]

    filepath.write_bytes(
        b"II*\x00"
        + struct.pack("<I", 8)
        + _ifd(8, zeroth)
        + _ifd(exif_offset, exif)
    )
    return filepath


class FakeRawImage:
    def __init__(self, xmp: bytes | None = None, notes=None, timestamp: int = 0):
        self._xmp = xmp
        self._notes = notes or {}
        self._timestamp = timestamp
        self.maker_notes_calls = 0

    def xmp_bytes(self) -> bytes:
        if self._xmp is None:
            raise RawError("no embedded xmp packet")
        return self._xmp

    def maker_notes(self) -> dict[str, str]:
        self.maker_notes_calls += 1
        return dict(self._notes)

    def generic_timestamp(self) -> int:
        return self._timestamp

    def exif_fields(self) -> dict[int, str]:
        return {}
