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


from pathlib import Path

import click

from . import raw, resolver
from .errors import CaptureTimeError
from .handlers import SIDECAR_SUFFIX
from .lib import filesystem as fs
from .lib import log

log.infect(config={"capturetime": "WARNING"})


def logging_options(fn):
    fn = click.option("-v", "verbose", count=True, help="Increase log level")(fn)
    fn = click.option("-q", "quiet", count=True, help="Decrease log level")(fn)

    return fn


def _raise_error(msg: str):
    raise click.ClickException(msg)


def _iter_targets(paths: list[Path], recursive: bool):
    return fs.iter_files_in_targets(
        paths,
        recursive=recursive,
        exclude_suffixes=(SIDECAR_SUFFIX,),
        error_handler=_raise_error,
    )


@click.group("capturetime")
@logging_options
def main(verbose: int = 0, quiet: int = 0):
    log.setup_log_level(verbose=verbose, quiet=quiet)


@main.command("show")
@click.option("--recursive", "-r", is_flag=True, default=False)
@click.argument("paths", nargs=-1, required=True, type=Path)
def show_cmd(paths: list[Path], recursive: bool = False):
    for path in _iter_targets(paths, recursive):
        try:
            original = resolver.datetime_original(path)
            create = resolver.create_date(path)
        except CaptureTimeError as e:
            raise click.ClickException(f"{click.format_filename(path)}: {e}") from e

        click.echo(f"{click.format_filename(path)}")
        click.echo(f'DateTimeOriginal "{original}"')
        click.echo(f'CreateDate "{create}"')


@main.command("timestamp")
@click.option("--recursive", "-r", is_flag=True, default=False)
@click.argument("paths", nargs=-1, required=True, type=Path)
def timestamp_cmd(paths: list[Path], recursive: bool = False):
    for path in _iter_targets(paths, recursive):
        try:
            stamp = resolver.get_timestamp(path)
        except CaptureTimeError as e:
            raise click.ClickException(f"{click.format_filename(path)}: {e}") from e

        click.echo(f"{click.format_filename(path)}: {stamp}")


@main.command("fields")
@click.argument("path", nargs=1, required=True, type=Path)
def fields_cmd(path: Path):
    try:
        img = raw.open_raw(path)
    except (CaptureTimeError, OSError) as e:
        raise click.ClickException(str(e)) from e

    for tag, text in sorted(img.exif_fields().items()):
        click.echo(f"0x{tag:04x}: {text}")
