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

"""Persistent cache store backed by :mod:`diskcache`"""

import logging
import os.path
from typing import Optional, Union

import diskcache

from ..configuration import Config


class DiskStore:
    """Cache store keeping entries in a :class:`diskcache.Cache` directory
    named after the store inside the configured ``datadir``. Entries survive
    process restarts and can be shared between processes.

    :param name: Name the store was registered under
    :param config: The :class:`~domaindata.Config` in use
    :raises ConfigError: if ``datadir`` is not an absolute path
    """

    def __init__(self, name: str, config: Config):
        self.name = name
        self.log = logging.getLogger(f'domaindata.cache.{name}')
        self.directory = os.path.join(config.datadir, name)
        self._cache = diskcache.Cache(self.directory)
        self.log.debug("Using cache directory %s", self.directory)

    def get(self, key: str) -> Optional[Union[str, bytes]]:
        return self._cache.get(key)

    def set(self, key: str, value: Union[str, bytes],
            ttl: Optional[int] = None) -> bool:
        if ttl is not None and ttl <= 0:
            self.delete(key)
            return True
        return self._cache.set(key, value, expire=ttl)

    def delete(self, key: str) -> bool:
        return self._cache.delete(key)

    def close(self):
        """Close the underlying database connection"""
        self._cache.close()
