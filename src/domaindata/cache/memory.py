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

"""In-process cache store backed by :mod:`cachetools`"""

import logging
import math
import threading
import time
from typing import Callable, Optional, Tuple, Union

import cachetools

from ..configuration import Config

#: Maximum number of entries kept by a :class:`MemoryStore`. Two datasets
#: per URL is all the manager ever writes.
DEFAULT_MAXSIZE = 128


def _time_to_use(_key, value: Tuple[Union[str, bytes], float],
                 now: float) -> float:
    return now + value[1]


class MemoryStore:
    """Cache store keeping entries in a :class:`cachetools.TLRUCache`, so each
    entry carries its own TTL. Entries live as long as the process.

    :param name: Name the store was registered under
    :param config: The :class:`~domaindata.Config` in use (unused, but
                   accepted so all built-in stores share a constructor)
    :param maxsize: Maximum number of entries
    :param timer: Clock used for expiry, :func:`time.monotonic` by default
    """

    def __init__(self, name: str, config: Optional[Config] = None,
                 maxsize: int = DEFAULT_MAXSIZE,
                 timer: Callable[[], float] = time.monotonic):
        self.name = name
        self.log = logging.getLogger(f'domaindata.cache.{name}')
        self._cache = cachetools.TLRUCache(maxsize=maxsize, ttu=_time_to_use,
                                           timer=timer)
        # cachetools caches are not thread-safe on their own
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[Union[str, bytes]]:
        with self._lock:
            entry = self._cache.get(key)
        if entry is None:
            return None
        return entry[0]

    def set(self, key: str, value: Union[str, bytes],
            ttl: Optional[int] = None) -> bool:
        if ttl is not None and ttl <= 0:
            self.delete(key)
            return True
        lifetime = math.inf if ttl is None else float(ttl)
        with self._lock:
            self._cache[key] = (value, lifetime)
        self.log.debug("Stored %s for %s seconds", key, ttl)
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None
