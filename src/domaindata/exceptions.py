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

"""All domaindata exceptions"""


class DomainDataException(Exception):
    """Base class for all domaindata exceptions"""


class ConfigError(DomainDataException):
    """Raised when the configuration is malformed or has other errors"""


class MisconfiguredExtension(ConfigError):
    """Raised when the cache store or HTTP client cannot be resolved from the
    configuration: the option is missing, names an unknown backend, or
    carries options the backend does not understand."""


class HttpClientException(DomainDataException):
    """HTTP clients raise when a dataset cannot be retrieved, either because
    of a network error or because the server answered with an error status."""


class CouldNotLoadRules(DomainDataException):
    """Raised when the Public Suffix List cannot be fetched, parsed or read
    back from the cache"""


class CouldNotLoadTLDs(DomainDataException):
    """Raised when the Root Zone Database cannot be fetched, parsed or read
    back from the cache"""


class CacheContractViolation(DomainDataException, TypeError):
    """Raised by :class:`~domaindata.Manager` when a cache store's ``set``
    returns something other than a bool. Some stores return ``None`` even
    though the write succeeded."""
