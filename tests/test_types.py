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


import dataclasses
import unittest

from capturetime.errors import TimestampNotFoundError
from capturetime.types import CreateDate, DateTimeOriginal, Instant

# 2023-05-01 10:15:00 UTC
STAMP = 1682936100


class InstantTest(unittest.TestCase):
    def test_to_utc_and_original(self):
        for instant in [
            Instant(STAMP),
            Instant(STAMP, offset=7200),
            Instant(STAMP, offset=-18000),
            Instant(-1, offset=3600, ms=500),
        ]:
            self.assertEqual(instant.to_utc(), instant.time)
            self.assertEqual(
                instant.to_original(), instant.to_utc() + (instant.offset or 0)
            )

    def test_format_uses_wall_clock(self):
        self.assertEqual(Instant(STAMP).format(), "2023-05-01 10:15:00")
        self.assertEqual(Instant(STAMP, offset=7200).format(), "2023-05-01 12:15:00")
        self.assertEqual(str(Instant(STAMP, offset=-3600)), "2023-05-01 09:15:00")

    def test_format_before_epoch(self):
        self.assertEqual(Instant(-1).format(), "1969-12-31 23:59:59")

    def test_parse_bare_local(self):
        self.assertEqual(Instant.parse("2023-05-01T10:15:00"), Instant(STAMP))
        self.assertEqual(Instant.parse("2023-05-01 10:15:00"), Instant(STAMP))
        self.assertEqual(Instant.parse("  2023-05-01T10:15:00\n"), Instant(STAMP))

    def test_parse_with_offset(self):
        self.assertEqual(
            Instant.parse("2023-05-01T12:15:00+02:00"), Instant(STAMP, offset=7200)
        )
        self.assertEqual(
            Instant.parse("2023-05-01T05:15:00-05:00"), Instant(STAMP, offset=-18000)
        )
        self.assertEqual(
            Instant.parse("2023-05-01T12:15:00+0200"), Instant(STAMP, offset=7200)
        )
        self.assertEqual(Instant.parse("2023-05-01T10:15:00Z"), Instant(STAMP, offset=0))

    def test_parse_drops_subseconds(self):
        instant = Instant.parse("2023-05-01T12:15:00.250+02:00")
        self.assertEqual(instant, Instant(STAMP, offset=7200))
        self.assertEqual(instant.ms, None)

    def test_parse_exif_style(self):
        self.assertEqual(Instant.parse("2023:05:01 10:15:00"), Instant(STAMP))

    def test_parse_date_only(self):
        self.assertEqual(Instant.parse("2023-05-01"), Instant(STAMP - 36900))

    def test_parse_garbage(self):
        for text in ["", "yesterday", "2023-13-45T99:00:00", "0000:00:00 00:00:00"]:
            with self.assertRaises(TimestampNotFoundError):
                Instant.parse(text)

    def test_format_parse_round_trip(self):
        for instant in [
            Instant(STAMP),
            Instant(STAMP, offset=7200),
            Instant(STAMP, offset=-34200, ms=999),
            Instant(0),
        ]:
            reparsed = Instant.parse(instant.format())
            self.assertEqual(reparsed.to_original(), instant.to_original())

    def test_immutable(self):
        instant = Instant(STAMP)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            instant.time = 0


class RoleTypesTest(unittest.TestCase):
    def test_roles_are_not_interchangeable(self):
        self.assertEqual(DateTimeOriginal(STAMP), DateTimeOriginal(STAMP))
        self.assertNotEqual(DateTimeOriginal(STAMP), CreateDate(STAMP))
        self.assertNotEqual(DateTimeOriginal(STAMP), Instant(STAMP))

    def test_roles_behave_as_instants(self):
        dto = DateTimeOriginal(STAMP, offset=3600)
        self.assertIsInstance(dto, Instant)
        self.assertEqual(dto.to_original(), STAMP + 3600)
        self.assertEqual(dto.format(), "2023-05-01 11:15:00")

    def test_parse_keeps_role(self):
        self.assertIsInstance(CreateDate.parse("2023-05-01T10:15:00"), CreateDate)


if __name__ == "__main__":
    unittest.main()
