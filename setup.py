#!/usr/bin/env python3
# -*- encoding: utf-8 -*-

# Copyright (C) 2018 Luis López <luis@cuarentaydos.com>
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


from setuptools import setup


setup(
    name="capturetime",
    version="1.0.0",
    author="Luis López",
    author_email="luis@cuarentaydos.com",
    packages=["capturetime", "capturetime.lib"],
    scripts=[],
    license="GPL-2.0-or-later",
    description="Find out when a picture was taken from its sidecar, EXIF or RAW metadata",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    install_requires=[
        "click",
        "colorama",
        "exifread>=3.5",
        "piexif",
        "pillow",
        "python-dateutil",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "capturetime=capturetime.cli:main",
        ]
    },
)
