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

import pytest

import doubles
import domaindata.cache


@pytest.fixture(autouse=True)
def isolated_store_registry(mocker):
    """Keep named stores from leaking between tests"""
    mocker.patch.dict(domaindata.cache._registered, clear=True)
    mocker.patch.dict(domaindata.cache._instances, clear=True)
    mocker.patch.dict(domaindata.cache.stores)


@pytest.fixture
def http_client():
    """Fixture creating a :class:`doubles.FakeHttpClient` serving both
    datasets"""
    return doubles.FakeHttpClient()


@pytest.fixture
def store():
    """Fixture creating an empty :class:`doubles.DictStore`"""
    return doubles.DictStore()


@pytest.fixture
def config_factory(http_client, store):
    """Fixture creating a factory for configuration mappings. Defaults to
    the fake HTTP client, the dict store and the test dataset URLs."""
    def factory(**overrides):
        config = {
            'url_psl': doubles.PSL_URL,
            'url_rzd': doubles.RZD_URL,
            'cache_client': store,
            'http_client': http_client,
        }
        config.update(overrides)
        return config
    return factory
