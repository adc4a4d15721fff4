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

"""Cache store interface, built-in stores and the named store registry"""

import logging
import sys
import threading
from typing import Any, Dict, Optional, Tuple

if sys.version_info < (3, 10):
    from importlib_metadata import entry_points
else:
    from importlib.metadata import entry_points

from ..configuration import Config
from ..exceptions import MisconfiguredExtension
from .base import CacheInterface
from .disk import DiskStore
from .memory import MemoryStore

log = logging.getLogger('domaindata.cache')

#: Entry point group third-party store types can register under
ENTRY_POINT_GROUP = 'domaindata.store'

#: Store types by name. Each is called with the store name and the
#: :class:`~domaindata.Config` to build an instance.
stores: Dict[str, Any] = {
    'memory': MemoryStore,
    'disk': DiskStore,
}

# Instances published by the host application with register_store()
_registered: Dict[str, CacheInterface] = dict()

# Instances built from store types, keyed by (name, datadir)
_instances: Dict[Tuple[str, Optional[str]], CacheInterface] = dict()

_lock = threading.Lock()


def register_store(name: str, store: CacheInterface) -> None:
    """Publish a store instance under a name so configurations can refer to
    it with ``cache_client = <name>``. Replaces any store previously
    registered under that name.

    :param name: The store name
    :param store: An object implementing :class:`CacheInterface`
    """
    with _lock:
        _registered[name] = store


def get_store(name: str, config: Config) -> CacheInterface:
    """Look up a named store, building it on first use. Stores built here are
    kept for the life of the process so their contents outlive any single
    call into :mod:`domaindata.factory`.

    :param name: The store name, either registered with
                 :func:`register_store`, one of the built-in :data:`stores`,
                 or the name of a ``domaindata.store`` entry point
    :param config: The :class:`~domaindata.Config` in use
    :raises MisconfiguredExtension: if no store has that name
    :return: The store
    """
    with _lock:
        try:
            return _registered[name]
        except KeyError:
            pass

        store_class = _find_store_type(name)
        if store_class is None:
            log.critical("No cache store named %s", name)
            raise MisconfiguredExtension(f"Cache store '{name}' is not "
                                         "defined")

        # A changed datadir gets a new instance
        key = (name, config.get('datadir'))
        try:
            return _instances[key]
        except KeyError:
            pass

        store = store_class(name, config)
        _instances[key] = store
        log.debug("Created cache store %s", name)
        return store


def _find_store_type(name: str) -> Any:
    """Find the store type for a name, loading it from an entry point if it
    is not built in

    :param name: The store name
    :return: The store type, or ``None`` if there is none by that name
    """
    if name in stores:
        return stores[name]

    discovered = entry_points(group=ENTRY_POINT_GROUP)
    try:
        entry_point = discovered[name]
    except KeyError:
        return None
    stores[name] = entry_point.load()
    return stores[name]


__all__ = [
    'CacheInterface',
    'DiskStore',
    'MemoryStore',
    'get_store',
    'register_store',
    'stores',
]
