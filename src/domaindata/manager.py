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

"""Dataset manager: fetches, parses and caches the Public Suffix List and the
Root Zone Database"""

import datetime
import hashlib
import logging
from typing import Any, Tuple, Union

from .cache import CacheInterface
from .configuration import PSL_URL, RZD_URL, parse_ttl
from .datasets import Rules, TopLevelDomains
from .exceptions import (CacheContractViolation, CouldNotLoadRules,
                         CouldNotLoadTLDs)
from .http import HttpClient

#: Cache TTL when neither the manager nor the call specifies one: 7 days
DEFAULT_CACHE_TTL = 86400 * 7

TTL = Union[None, int, float, str, datetime.timedelta]


def cache_key(prefix: str, url: str) -> str:
    """Cache key for the dataset of the given kind fetched from ``url``

    :param prefix: ``'PSL'`` or ``'RZD'``
    :param url: The dataset URL
    """
    digest = hashlib.md5(url.lower().encode('utf-8')).hexdigest()
    return f"{prefix}_FULL_{digest}"


class Manager:
    """Fetches the datasets over HTTP, parses them, and keeps the parsed
    form in a cache store.

    :param cache: The cache store
    :param http: The HTTP client
    :param cache_ttl: Default TTL for cached datasets (see
                      :func:`~domaindata.configuration.parse_ttl`). ``None``
                      means :data:`DEFAULT_CACHE_TTL`.
    """

    PSL_URL = PSL_URL
    RZD_URL = RZD_URL

    def __init__(self, cache: CacheInterface, http: HttpClient,
                 cache_ttl: TTL = None):
        self.log = logging.getLogger('domaindata.manager')
        self.cache = cache
        self.http = http
        ttl = parse_ttl(cache_ttl)
        self.cache_ttl: int = DEFAULT_CACHE_TTL if ttl is None else ttl

    def get_rules(self, url: str = PSL_URL, ttl: TTL = None) -> Rules:
        """Return the Public Suffix List, fetching it if it is not cached

        When the cache store accepts the list but does not keep it (for
        instance with a TTL of 0), the freshly parsed list is returned.

        :param url: Where to fetch the list from
        :param ttl: TTL to cache the list for if it must be fetched
        :raises CouldNotLoadRules: if the list cannot be loaded
        :raises HttpClientException: if the list cannot be fetched
        """
        key = cache_key('PSL', url)
        data = self.cache.get(key)
        if data is not None:
            return Rules.from_json(data)

        stored, rules = self._refresh_rules(url, ttl)
        if not stored:
            raise CouldNotLoadRules(f"Unable to cache the Public Suffix "
                                    f"List from {url}")
        data = self.cache.get(key)
        if data is None:
            self.log.debug("Public Suffix List from %s was not kept in the "
                           "cache", url)
            return rules
        return Rules.from_json(data)

    def get_tlds(self, url: str = RZD_URL,
                 ttl: TTL = None) -> TopLevelDomains:
        """Return the Root Zone Database, fetching it if it is not cached

        When the cache store accepts the list but does not keep it (for
        instance with a TTL of 0), the freshly parsed list is returned.

        :param url: Where to fetch the list from
        :param ttl: TTL to cache the list for if it must be fetched
        :raises CouldNotLoadTLDs: if the list cannot be loaded
        :raises HttpClientException: if the list cannot be fetched
        """
        key = cache_key('RZD', url)
        data = self.cache.get(key)
        if data is not None:
            return TopLevelDomains.from_json(data)

        stored, tlds = self._refresh_tlds(url, ttl)
        if not stored:
            raise CouldNotLoadTLDs(f"Unable to cache the Root Zone "
                                   f"Database from {url}")
        data = self.cache.get(key)
        if data is None:
            self.log.debug("Root Zone Database from %s was not kept in the "
                           "cache", url)
            return tlds
        return TopLevelDomains.from_json(data)

    def refresh_rules(self, url: str = PSL_URL, ttl: TTL = None) -> bool:
        """Fetch the Public Suffix List and cache it, whether or not the
        cached copy is still fresh

        :return: Whether the cache store accepted the list
        :raises CacheContractViolation: if the cache store does not return a
                                        bool
        """
        return self._refresh_rules(url, ttl)[0]

    def refresh_tlds(self, url: str = RZD_URL, ttl: TTL = None) -> bool:
        """Fetch the Root Zone Database and cache it, whether or not the
        cached copy is still fresh

        :return: Whether the cache store accepted the list
        :raises CacheContractViolation: if the cache store does not return a
                                        bool
        """
        return self._refresh_tlds(url, ttl)[0]

    def _refresh_rules(self, url: str, ttl: TTL) -> Tuple[bool, Rules]:
        self.log.info("Refreshing the Public Suffix List from %s", url)
        text = self._fetch_text(url, CouldNotLoadRules)
        rules = Rules.from_text(text)
        result = self.cache.set(cache_key('PSL', url), rules.to_json(),
                                self._filter_ttl(ttl))
        return self._check_result('refresh_rules', result), rules

    def _refresh_tlds(self, url: str,
                      ttl: TTL) -> Tuple[bool, TopLevelDomains]:
        self.log.info("Refreshing the Root Zone Database from %s", url)
        text = self._fetch_text(url, CouldNotLoadTLDs)
        tlds = TopLevelDomains.from_text(text)
        result = self.cache.set(cache_key('RZD', url), tlds.to_json(),
                                self._filter_ttl(ttl))
        return self._check_result('refresh_tlds', result), tlds

    def _fetch_text(self, url: str, error: type) -> str:
        content = self.http.fetch(url)
        if isinstance(content, str):
            return content
        try:
            return content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise error(f"{url} did not return UTF-8 text") from e

    def _filter_ttl(self, ttl: TTL) -> int:
        seconds = parse_ttl(ttl)
        if seconds is None:
            return self.cache_ttl
        return seconds

    def _check_result(self, operation: str, result: Any) -> bool:
        """Enforce the cache store contract that ``set`` returns a bool"""
        if isinstance(result, bool):
            return result
        returned = 'None' if result is None else type(result).__name__
        raise CacheContractViolation(
            f"Return value of {Manager.__module__}.{Manager.__qualname__}."
            f"{operation}() must be of the type bool, {returned} returned"
        )
