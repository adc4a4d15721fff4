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

"""HTTP client built on :mod:`pycurl`. Requires the ``curl`` extra."""

import io
import logging
from typing import Any, Dict, Mapping, Optional

import pycurl

from ..configuration import USER_AGENT
from ..exceptions import HttpClientException, MisconfiguredExtension


def _to_curl_value(value: Any) -> Any:
    # INI values are always strings, but most curl options take integers
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


class CurlHttpClient:
    """HTTP client built on :mod:`pycurl`. Selected with
    ``http_client = curl``.

    Options are libcurl option names without the ``CURLOPT_`` prefix, in any
    case, e.g. ``{'timeout': 10, 'proxy': 'http://proxy:3128'}``.

    :param options: The ``http_client_options`` from the configuration
    :raises MisconfiguredExtension: if an option name is unknown
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        self.log = logging.getLogger('domaindata.http')

        #: Curl options to set on every transfer, keyed by pycurl constant
        self.curl_options: Dict[int, Any] = dict()
        for name, value in (options or {}).items():
            try:
                option = getattr(pycurl, name.upper())
            except AttributeError:
                self.log.critical("Unknown curl option: %s", name)
                raise MisconfiguredExtension(f"Unknown curl option: "
                                             f"{name}") from None
            self.curl_options[option] = _to_curl_value(value)

    def fetch(self, url: str) -> bytes:
        buffer = io.BytesIO()
        curl = pycurl.Curl()
        try:
            curl.setopt(pycurl.URL, url)
            curl.setopt(pycurl.FOLLOWLOCATION, True)
            curl.setopt(pycurl.USERAGENT, USER_AGENT)
            for option, value in self.curl_options.items():
                try:
                    curl.setopt(option, value)
                except TypeError as e:
                    raise MisconfiguredExtension(
                        f"Invalid value for curl option {option}: {value!r}"
                    ) from e
            curl.setopt(pycurl.WRITEDATA, buffer)
            curl.perform()
            status = curl.getinfo(pycurl.RESPONSE_CODE)
        except pycurl.error as e:
            self.log.error("Could not fetch %s: %s", url, e)
            raise HttpClientException(f"Could not fetch {url}: {e}") from e
        finally:
            curl.close()

        if status >= 400:
            self.log.error("Received HTTP %d from %s", status, url)
            raise HttpClientException(f"Received HTTP {status} from {url}")
        return buffer.getvalue()
