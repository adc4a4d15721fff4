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

"""Resolver factory: builds a :class:`~domaindata.Manager` from the
configuration and hands dataset requests to it.

Every call reads the configuration again and builds a new manager, so
configuration changes take effect on the next call. Only the cache store
contents persist between calls.
"""

import logging
import re
from typing import Any, Callable, Dict, Mapping, TypeVar, Union

from . import cache
from .configuration import Config
from .datasets import Rules, TopLevelDomains
from .exceptions import MisconfiguredExtension
from .http import HttpClient, RequestsHttpClient
from .manager import Manager

log = logging.getLogger('domaindata.factory')

T = TypeVar('T')

ConfigLike = Union[Config, Mapping[str, Any]]

# What a refresh reports when the cache store's set() returned None
_CACHE_CONTRACT_VIOLATION_RE = re.compile(
    r'^Return value of (?:[\w.]+\.)?Manager\.(?:refresh_rules|refresh_tlds)'
    r'\(\) must be of the type bool(?:ean)?, None returned$'
)


def is_cache_contract_violation(exc: BaseException) -> bool:
    """Check whether an exception is the manager reporting that the cache
    store's ``set`` returned ``None``. Stores that do this have still written
    the value, so the failure can be compensated for.

    :param exc: The exception to check
    :return: ``True`` only for a :class:`TypeError` with exactly that message
    """
    if not isinstance(exc, TypeError):
        return False
    return _CACHE_CONTRACT_VIOLATION_RE.match(str(exc)) is not None


def _get_curl_client(options: Mapping[str, Any]) -> HttpClient:
    try:
        from .http.curl import CurlHttpClient
    except ImportError as e:
        log.critical("The curl HTTP client requires pycurl")
        raise MisconfiguredExtension(
            "The `http_client` 'curl' requires pycurl. Install "
            "domaindata[curl]."
        ) from e
    return CurlHttpClient(options)


def _get_guzzle_client(options: Mapping[str, Any]) -> HttpClient:
    return RequestsHttpClient(options)


HttpClientStrategy = Callable[[Mapping[str, Any]], HttpClient]

#: Built-in HTTP client strategies by name
SUPPORTED_HTTP_CLIENTS: Dict[str, HttpClientStrategy] = {
    'curl': _get_curl_client,
    'guzzle': _get_guzzle_client,
}


def _http_client_error() -> MisconfiguredExtension:
    return MisconfiguredExtension(
        "The `http_client` must be an object with a fetch() method or one of "
        "the following strings: " + ', '.join(SUPPORTED_HTTP_CLIENTS)
    )


def _as_config(config: ConfigLike) -> Config:
    if isinstance(config, Config):
        return config
    return Config(config)


def _get_cache(config: Config) -> cache.CacheInterface:
    """Resolve the ``cache_client`` option to a cache store

    :raises MisconfiguredExtension: if the option is missing or names an
                                    unknown store
    """
    cache_client = config.cache_client
    if cache_client is None:
        log.critical("'cache_client' config option is required")
        raise MisconfiguredExtension(
            "The `cache_client` must be the name of a cache store or an "
            "object with get(), set() and delete() methods"
        )

    if isinstance(cache_client, str):
        return cache.get_store(cache_client, config)
    return cache_client


def _get_http_client(config: Config) -> HttpClient:
    """Resolve the ``http_client`` option to an HTTP client

    :raises MisconfiguredExtension: if the option is missing or is a string
                                    other than a supported strategy name
    """
    http_client = config.http_client
    if http_client is None:
        log.critical("'http_client' config option is required")
        raise _http_client_error()

    if not isinstance(http_client, str):
        return http_client

    try:
        strategy = SUPPORTED_HTTP_CLIENTS[http_client]
    except KeyError:
        log.critical("Unknown HTTP client %s", http_client)
        raise _http_client_error() from None
    return strategy(config.http_client_options)


def _get_manager(config: Config) -> Manager:
    return Manager(_get_cache(config), _get_http_client(config),
                   config.cache_ttl)


def _retry_on_contract_violation(load: Callable[[], T]) -> T:
    """Call ``load``, calling it once more if the cache store violated its
    contract. The first attempt already wrote the dataset, so the second
    reads it back from the cache."""
    try:
        return load()
    except TypeError as e:
        if not is_cache_contract_violation(e):
            raise
        log.warning("Cache store did not return a bool when writing; "
                    "reading the dataset back from the cache")
        return load()


def _succeed_on_contract_violation(refresh: Callable[[], bool]) -> bool:
    """Call ``refresh``, treating a cache store contract violation as success
    since the write already happened"""
    try:
        return refresh()
    except TypeError as e:
        if not is_cache_contract_violation(e):
            raise
        log.warning("Cache store did not return a bool when writing; "
                    "treating the refresh as successful")
        return True


def get_rules(config: ConfigLike) -> Rules:
    """Return the Public Suffix List from ``url_psl``, from the cache if it
    is fresh, otherwise fetching and caching it for ``cache_ttl``

    :param config: A :class:`~domaindata.Config` or configuration mapping
    :raises MisconfiguredExtension: if the cache store or HTTP client cannot
                                    be resolved
    """
    config = _as_config(config)
    manager = _get_manager(config)
    url = config.url_psl
    ttl = config.cache_ttl
    return _retry_on_contract_violation(lambda: manager.get_rules(url, ttl))


def get_tlds(config: ConfigLike) -> TopLevelDomains:
    """Return the Root Zone Database from ``url_rzd``, from the cache if it
    is fresh, otherwise fetching and caching it for ``cache_ttl``

    :param config: A :class:`~domaindata.Config` or configuration mapping
    :raises MisconfiguredExtension: if the cache store or HTTP client cannot
                                    be resolved
    """
    config = _as_config(config)
    manager = _get_manager(config)
    url = config.url_rzd
    ttl = config.cache_ttl
    return _retry_on_contract_violation(lambda: manager.get_tlds(url, ttl))


def refresh_rules(config: ConfigLike) -> bool:
    """Fetch the Public Suffix List from ``url_psl`` and cache it, even if
    the cached copy is still fresh

    :param config: A :class:`~domaindata.Config` or configuration mapping
    :return: Whether the refresh succeeded
    """
    config = _as_config(config)
    manager = _get_manager(config)
    url = config.url_psl
    ttl = config.cache_ttl
    return _succeed_on_contract_violation(
        lambda: manager.refresh_rules(url, ttl)
    )


def refresh_tlds(config: ConfigLike) -> bool:
    """Fetch the Root Zone Database from ``url_rzd`` and cache it, even if
    the cached copy is still fresh

    :param config: A :class:`~domaindata.Config` or configuration mapping
    :return: Whether the refresh succeeded
    """
    config = _as_config(config)
    manager = _get_manager(config)
    url = config.url_rzd
    ttl = config.cache_ttl
    return _succeed_on_contract_violation(
        lambda: manager.refresh_tlds(url, ttl)
    )
