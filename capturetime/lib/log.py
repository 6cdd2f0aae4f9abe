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
import os
import sys
import warnings

import colorama

LOGGER_NAME = "capturetime"
ENV_VARIABLE = "CAPTURETIME_LOGGING"

FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_is_infected = False


class LogFormatter(logging.Formatter):
    LEVEL_ABBRS = {
        "CRITICAL": "CRT",
        "ERROR": "ERR",
        "WARNING": "WRN",
        "INFO": "NFO",
        "DEBUG": "DBG",
    }

    COLOR_MAP = {
        logging.DEBUG: colorama.Fore.CYAN,
        logging.INFO: colorama.Fore.GREEN,
        logging.WARNING: colorama.Fore.YELLOW,
        logging.ERROR: colorama.Fore.RED,
        logging.CRITICAL: colorama.Back.RED,
    }

    def __init__(self, *args, use_color: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.use_color = use_color

    def format(self, record):
        record.levelname = self.LEVEL_ABBRS.get(record.levelname, record.levelname)

        output = super().format(record)
        if self.use_color and (color := self.COLOR_MAP.get(record.levelno)):
            output = f"{color}{output}{colorama.Style.RESET_ALL}"

        return output


def infect(config: dict[str, int | str]):
    """
    Attach a stderr handler to the root logger and set up levels.

    $CAPTURETIME_LOGGING (ex. 'capturetime:debug,exifread:info') replaces
    'config' when set.
    """
    global _is_infected

    if _is_infected:
        return

    if env_config := os.environ.get(ENV_VARIABLE, ""):
        config = parse_log_str(env_config)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(
        LogFormatter(fmt=FORMAT, datefmt=DATE_FORMAT, use_color=sys.stderr.isatty())
    )
    logging.getLogger().addHandler(handler)

    for logname, loglevel in config.items():
        logger = logging.getLogger() if logname == "*" else logging.getLogger(logname)
        logger.setLevel(log_level_value(loglevel))

    _is_infected = True


def log_level_value(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper())
    else:
        return level


def parse_log_str(s: str) -> dict[str, int]:
    config = {}

    for comp in filter(None, s.split(",")):
        name, _, level = comp.rpartition(":")
        name = name or "*"

        try:
            config[name] = log_level_value(level.strip())
        except AttributeError:
            warnings.warn(f"Unknown level '{level}' for '{name}'")

    return config


def setup_log_level(*, quiet: int = 0, verbose: int = 0):
    # Each -v/-q moves the package logger one level, clamped to DEBUG..CRITICAL
    logger = logging.getLogger(LOGGER_NAME)
    level = logger.getEffectiveLevel() - (verbose * 10) + (quiet * 10)
    logger.setLevel(max(min(level, logging.CRITICAL), logging.DEBUG))
