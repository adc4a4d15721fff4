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

"""HTTP client interface and the built-in requests client"""

from typing import Protocol

from .session import RequestsHttpClient


class HttpClient(Protocol):
    """Any object with a ``fetch`` method can be used as the HTTP client,
    either built from a strategy name or passed in directly as the
    ``http_client`` option."""

    def fetch(self, url: str) -> bytes:
        """Retrieve the body at ``url``

        :raises HttpClientException: if the body cannot be retrieved
        """
        ...


__all__ = ['HttpClient', 'RequestsHttpClient']
