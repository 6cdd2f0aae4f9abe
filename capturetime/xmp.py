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


import xml.etree.ElementTree as et
from typing import BinaryIO

from .errors import XmpError

NAMESPACES = {
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "x": "adobe:ns:meta/",
    "xmp": "http://ns.adobe.com/xap/1.0/",
    "exif": "http://ns.adobe.com/exif/1.0/",
    "tiff": "http://ns.adobe.com/tiff/1.0/",
    "photoshop": "http://ns.adobe.com/photoshop/1.0/",
}

EXIF_DATETIMEORIGINAL = "exif:DateTimeOriginal"
XMP_CREATEDATE = "xmp:CreateDate"

_PACKET_MARKERS = ((b"<x:xmpmeta", b"</x:xmpmeta>"), (b"<rdf:RDF", b"</rdf:RDF>"))
_CONTAINERS = ("Seq", "Alt", "Bag")


def load(stream: BinaryIO) -> et.Element:
    data = _trim_packet(stream.read())
    if not data:
        raise XmpError("empty xmp document")

    try:
        return et.fromstring(data)
    except et.ParseError as e:
        raise XmpError(f"invalid xmp document: {e}") from e


def get_descriptions(document: et.Element) -> list[et.Element]:
    if document.tag == _qualify("rdf:Description"):
        return [document]

    descriptions = document.findall(".//rdf:Description", namespaces=NAMESPACES)
    if not descriptions:
        raise XmpError("rdf:Description not found")

    return descriptions


def get_item(description: et.Element, key: str) -> str:
    """
    Read a simple property from a description. XMP writers use both the
    attribute form (`<rdf:Description exif:DateTimeOriginal="...">`) and the
    element form, sometimes wrapping the value in an rdf container.
    """
    qname = _qualify(key)

    if (value := description.get(qname)) is not None:
        return value

    child = description.find(qname)
    if child is None:
        raise XmpError(f"{key} not found")

    for container in _CONTAINERS:
        li = child.find(f"rdf:{container}/rdf:li", namespaces=NAMESPACES)
        if li is not None and li.text:
            return li.text

    if child.text is None:
        raise XmpError(f"{key} is empty")

    return child.text


def _qualify(key: str) -> str:
    prefix, name = key.split(":", 1)
    try:
        return "{" + NAMESPACES[prefix] + "}" + name
    except KeyError as e:
        raise XmpError(f"unknown namespace prefix '{prefix}'") from e


def _trim_packet(data: bytes) -> bytes:
    # Packets extracted from RAW containers come with padding and sometimes
    # garbage around the document
    data = data.strip(b"\x00 \t\r\n")

    for begin, end in _PACKET_MARKERS:
        begin_idx = data.find(begin)
        if begin_idx < 0:
            continue

        end_idx = data.rfind(end, begin_idx)
        if end_idx < 0:
            return data[begin_idx:]

        return data[begin_idx : end_idx + len(end)]

    return data
