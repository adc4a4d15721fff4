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

"""domaindata: cached Public Suffix List and Root Zone Database

The :mod:`~domaindata.factory` functions are the entry points. The rest of
this module is useful to applications supplying their own cache stores or
HTTP clients.
"""

from .cache import CacheInterface, get_store, register_store
from .configuration import Config, read_file, read_file_from_path
from .datasets import Rules, TopLevelDomains
from .exceptions import (DomainDataException, ConfigError,
                         MisconfiguredExtension, HttpClientException,
                         CouldNotLoadRules, CouldNotLoadTLDs,
                         CacheContractViolation)
from .factory import get_rules, get_tlds, refresh_rules, refresh_tlds
from .http import HttpClient
from .manager import Manager
