#  Domaindata - Cached Public Suffix List and Root Zone Database
#  Copyright (C) 2023 Dominick C. Pastore
#
#  This program is free software: you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation, either version 3 of the License, or
#  (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""domaindata configuration parsing"""

import configparser
import datetime
import logging
import os.path
import pathlib
import re
import sys

from typing import Any, Dict, Mapping, Optional, TextIO, Union

if sys.version_info < (3, 10):
    from importlib_metadata import version
else:
    from importlib.metadata import version

from .exceptions import ConfigError, MisconfiguredExtension


USER_AGENT = f"domaindata/{version('domaindata')}"

#: Default location of the Public Suffix List
PSL_URL = 'https://publicsuffix.org/list/public_suffix_list.dat'

#: Default location of the IANA Root Zone Database TLD list
RZD_URL = 'https://data.iana.org/TLD/tlds-alpha-by-domain.txt'

DEFAULT_DATA_DIR = '/var/cache/domaindata'

#: Name of the INI section holding the main options
MAIN_SECTION = 'domaindata'

#: Name of the INI section holding the HTTP client options
HTTP_OPTIONS_SECTION = 'domaindata.http_client_options'

_TTL_UNITS = {
    's': 1, 'sec': 1, 'secs': 1, 'second': 1, 'seconds': 1,
    'm': 60, 'min': 60, 'mins': 60, 'minute': 60, 'minutes': 60,
    'h': 3600, 'hr': 3600, 'hrs': 3600, 'hour': 3600, 'hours': 3600,
    'd': 86400, 'day': 86400, 'days': 86400,
    'w': 604800, 'week': 604800, 'weeks': 604800,
}

_TTL_RE = re.compile(r'^(?P<count>\d+)\s*(?P<unit>[a-z]+)$')

log = logging.getLogger('domaindata')


def parse_ttl(
    value: Union[None, int, float, str, datetime.timedelta]
) -> Optional[int]:
    """Normalize a TTL to a number of seconds

    :param value: ``None``, a number of seconds, a :class:`~datetime.timedelta`
                  or a string such as ``"86400"``, ``"7 days"`` or ``"12h"``
    :raises TypeError: if the value is not one of the types above
    :raises ValueError: if a string cannot be parsed or the TTL is negative
    :return: The TTL in seconds, or ``None`` if ``value`` was ``None``
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raise TypeError("TTL must be a number of seconds, a timedelta or a "
                        "string, not a bool")
    if isinstance(value, datetime.timedelta):
        seconds = int(value.total_seconds())
    elif isinstance(value, (int, float)):
        seconds = int(value)
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            seconds = int(text)
        else:
            match = _TTL_RE.match(text)
            if match is None or match.group('unit') not in _TTL_UNITS:
                raise ValueError(f"Cannot parse TTL '{value}'")
            seconds = (int(match.group('count')) *
                       _TTL_UNITS[match.group('unit')])
    else:
        raise TypeError("TTL must be a number of seconds, a timedelta or a "
                        f"string, not {type(value).__name__}")

    if seconds < 0:
        raise ValueError(f"TTL cannot be negative: {value}")
    return seconds


class Config:
    """domaindata configuration data

    A thin view over a configuration mapping. Nothing is memoized: every
    property reads the mapping again, so changes to the mapping are visible
    on the next call.

    :param options: Mapping of configuration options
    """

    def __init__(self, options: Mapping[str, Any]):
        #: The configuration mapping
        self.options: Mapping[str, Any] = options

    def get(self, key: str, default: Any = None) -> Any:
        """Return an option, or ``default`` if it is missing or ``None``"""
        value = self.options.get(key)
        if value is None:
            return default
        return value

    @property
    def url_psl(self) -> str:
        return self.get('url_psl', PSL_URL)

    @property
    def url_rzd(self) -> str:
        return self.get('url_rzd', RZD_URL)

    @property
    def cache_ttl(self) -> Optional[int]:
        """The configured TTL in seconds, or ``None`` for the manager's
        default

        :raises ConfigError: if the TTL is malformed
        """
        value = self.get('cache_ttl')
        try:
            return parse_ttl(value)
        except (TypeError, ValueError) as e:
            log.critical("'cache_ttl' config option is invalid: %s", e)
            raise ConfigError(f"Config option 'cache_ttl' is invalid: "
                              f"{e}") from None

    @property
    def cache_client(self) -> Any:
        return self.get('cache_client')

    @property
    def http_client(self) -> Any:
        return self.get('http_client')

    @property
    def http_client_options(self) -> Dict[str, Any]:
        """Options for the HTTP client strategy

        :raises MisconfiguredExtension: if the option is not a mapping
        """
        value = self.get('http_client_options', {})
        if not isinstance(value, Mapping):
            log.critical("'http_client_options' config option must be a "
                         "mapping, not %s", type(value).__name__)
            raise MisconfiguredExtension(
                "Config option 'http_client_options' must be a mapping, not "
                f"{type(value).__name__}")
        return dict(value)

    @property
    def datadir(self) -> str:
        """Data directory for file-backed cache stores

        :raises ConfigError: if the directory is not an absolute path
        """
        datadir = self.get('datadir', DEFAULT_DATA_DIR)
        if not os.path.isabs(datadir):
            raise ConfigError("Config option 'datadir' cannot be a relative "
                              "path")
        return datadir


def _process_config(config: configparser.ConfigParser) -> Config:
    """Process the given :class:`~configparser.ConfigParser` into a
    :class:`Config`

    :param config: The configuration to process
    :raises ConfigError: if the configuration is invalid
    :returns: the processed configuration
    """
    # Note: ConfigParser already handles catching duplicate sections and
    #   duplicate keys

    main: Dict[str, Any] = dict()
    http_client_options: Dict[str, str] = dict()

    for section in config.sections():
        if section == MAIN_SECTION:
            main.update(config[section])
        elif section == HTTP_OPTIONS_SECTION:
            http_client_options.update(config[section])
        else:
            raise ConfigError("Config section %s is not a %s or %s section" %
                              (section, MAIN_SECTION, HTTP_OPTIONS_SECTION))

    if http_client_options:
        main['http_client_options'] = http_client_options
    return Config(main)


def read_file_from_path(filename: Union[str, pathlib.Path]) -> Config:
    """Read configuration from the named file or :class:`~pathlib.Path`

    :param filename: Filename or path to read from
    :raises ConfigError: if the config file cannot be read or is invalid
    :return: A :class:`Config` ready to be passed to the
             :mod:`~domaindata.factory` functions
    """
    try:
        with open(filename, 'r') as f:
            return read_file(f)
    except OSError as e:
        raise ConfigError("Could not read config file %s: %s" %
                          (filename, e.strerror)) from e


def read_file(configfile: TextIO) -> Config:
    """Read configuration in from the given file-like object

    :param configfile: Filelike object to read the config from
    :raises ConfigError: if the config file cannot be read or is invalid
    :return: A :class:`Config` ready to be passed to the
             :mod:`~domaindata.factory` functions
    """
    config = configparser.ConfigParser()
    try:
        config.read_file(configfile)
    except configparser.Error as e:
        raise ConfigError("Error in config file: %s" % e) from e
    except OSError as e:
        raise ConfigError("Could not read config file: %s" % e) from e

    return _process_config(config)
