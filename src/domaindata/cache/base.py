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

"""The cache store interface expected by :class:`~domaindata.Manager`"""

from typing import Optional, Protocol, Union


class CacheInterface(Protocol):
    """Any object with these three methods can be used as a cache store,
    whether it comes from the store registry or is passed in directly as the
    ``cache_client`` option."""

    def get(self, key: str) -> Optional[Union[str, bytes]]:
        """Return the value stored under ``key``, or ``None`` if it is missing
        or expired"""
        ...

    def set(self, key: str, value: Union[str, bytes],
            ttl: Optional[int] = None) -> bool:
        """Store ``value`` under ``key`` for ``ttl`` seconds (forever if
        ``None``). Must return ``True`` on success and ``False`` on
        failure."""
        ...

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns ``True`` if it was present."""
        ...
