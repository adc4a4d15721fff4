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

"""HTTP client built on :mod:`requests`"""

import logging
from typing import Any, Mapping, Optional

import requests

from ..configuration import USER_AGENT
from ..exceptions import HttpClientException, MisconfiguredExtension

#: Seconds to wait for the server when no ``timeout`` option is given
DEFAULT_TIMEOUT = 10.0

_TRUE_STRINGS = ('true', 'yes', 'on', '1')
_FALSE_STRINGS = ('false', 'no', 'off', '0')


def _to_verify(value: Any) -> Any:
    """Options read from an INI file are strings. ``verify`` may be a bool or
    the path to a CA bundle."""
    if isinstance(value, str):
        if value.lower() in _TRUE_STRINGS:
            return True
        if value.lower() in _FALSE_STRINGS:
            return False
    return value


class RequestsHttpClient:
    """HTTP client built on :func:`requests.get`. Selected with
    ``http_client = guzzle``.

    Recognized options:

    - ``timeout``: seconds to wait for the server (default 10)
    - ``headers``: dict of extra request headers
    - ``proxies``: dict mapping URL scheme to proxy URL
    - ``verify``: whether to verify TLS certificates, or a CA bundle path
    - ``cert``: client certificate path, or (cert, key) paths

    :param options: The ``http_client_options`` from the configuration
    :raises MisconfiguredExtension: if an option is unknown or invalid
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        self.log = logging.getLogger('domaindata.http')
        options = dict(options or {})

        try:
            self.timeout = float(options.pop('timeout', DEFAULT_TIMEOUT))
        except (TypeError, ValueError):
            self.log.critical("'timeout' HTTP client option must be a number")
            raise MisconfiguredExtension("HTTP client option 'timeout' must "
                                         "be a number") from None

        self.headers = {'User-Agent': USER_AGENT}
        self.headers.update(options.pop('headers', {}))
        self.proxies = dict(options.pop('proxies', {}))
        self.verify = _to_verify(options.pop('verify', True))
        self.cert = options.pop('cert', None)

        if options:
            unknown = ', '.join(sorted(options))
            self.log.critical("Unknown HTTP client options: %s", unknown)
            raise MisconfiguredExtension(f"Unknown HTTP client options: "
                                         f"{unknown}")

    def fetch(self, url: str) -> bytes:
        try:
            r = requests.get(url, headers=self.headers, proxies=self.proxies,
                             verify=self.verify, cert=self.cert,
                             timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.log.error("Could not fetch %s: %s", url, e)
            raise HttpClientException(f"Could not fetch {url}: {e}") from e

        try:
            r.raise_for_status()
        except requests.exceptions.HTTPError as e:
            self.log.error("Received HTTP %d from %s", r.status_code, url)
            raise HttpClientException(f"Received HTTP {r.status_code} from "
                                      f"{url}") from e
        return r.content

