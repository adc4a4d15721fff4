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
import domaindata
import domaindata.cache
from domaindata.cache import DiskStore, MemoryStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store(clock):
    return MemoryStore('test', timer=clock)


@pytest.fixture
def disk_config(tmp_path):
    return domaindata.Config({'datadir': str(tmp_path)})


class TestMemoryStore:
    def test_get_missing(self, memory_store):
        assert memory_store.get('missing') is None

    def test_set_and_get(self, memory_store):
        assert memory_store.set('key', 'value', 60) is True
        assert memory_store.get('key') == 'value'

    def test_expires(self, memory_store, clock):
        """Test that entries disappear once their TTL has passed"""
        memory_store.set('key', 'value', 60)

        clock.now += 59
        assert memory_store.get('key') == 'value'

        clock.now += 2
        assert memory_store.get('key') is None

    def test_per_entry_ttl(self, memory_store, clock):
        """Test that each entry keeps its own TTL"""
        memory_store.set('short', 'a', 10)
        memory_store.set('long', 'b', 100)

        clock.now += 50

        assert memory_store.get('short') is None
        assert memory_store.get('long') == 'b'

    def test_no_ttl_never_expires(self, memory_store, clock):
        memory_store.set('key', b'value')

        clock.now += 10 ** 9

        assert memory_store.get('key') == b'value'

    def test_zero_ttl_deletes(self, memory_store):
        memory_store.set('key', 'value')

        assert memory_store.set('key', 'other', 0) is True
        assert memory_store.get('key') is None

    def test_delete(self, memory_store):
        memory_store.set('key', 'value')

        assert memory_store.delete('key') is True
        assert memory_store.get('key') is None
        assert memory_store.delete('key') is False


class TestDiskStore:
    def test_directory(self, disk_config, tmp_path):
        store = DiskStore('shared', disk_config)
        try:
            assert store.directory == str(tmp_path / 'shared')
        finally:
            store.close()

    def test_set_get_delete(self, disk_config):
        store = DiskStore('test', disk_config)
        try:
            assert store.get('key') is None
            assert store.set('key', 'value', 60) is True
            assert store.get('key') == 'value'
            assert store.delete('key') is True
            assert store.get('key') is None
        finally:
            store.close()

    def test_persists(self, disk_config):
        """Test that a second store on the same directory sees the data"""
        first = DiskStore('test', disk_config)
        first.set('key', 'value')
        first.close()

        second = DiskStore('test', disk_config)
        try:
            assert second.get('key') == 'value'
        finally:
            second.close()

    def test_zero_ttl_deletes(self, disk_config):
        store = DiskStore('test', disk_config)
        try:
            store.set('key', 'value')
            assert store.set('key', 'other', 0) is True
            assert store.get('key') is None
        finally:
            store.close()


class TestRegistry:
    def test_registered_store(self):
        store = doubles.DictStore()
        domaindata.register_store('app', store)

        assert domaindata.get_store('app', domaindata.Config({})) is store

    def test_registered_store_shadows_built_in(self):
        """Test that a store registered by the application wins over a
        built-in store type of the same name"""
        store = doubles.DictStore()
        domaindata.register_store('memory', store)

        assert domaindata.get_store('memory', domaindata.Config({})) is store

    def test_built_in_store_reused(self):
        """Test that a named store outlives a single lookup"""
        config = domaindata.Config({})

        first = domaindata.get_store('memory', config)
        first.set('key', 'value')
        second = domaindata.get_store('memory', config)

        assert isinstance(first, MemoryStore)
        assert second is first
        assert second.get('key') == 'value'

    def test_new_instance_per_datadir(self, tmp_path):
        """Test that changing datadir does not reuse a stale store"""
        first = domaindata.get_store(
            'memory', domaindata.Config({'datadir': str(tmp_path / 'a')})
        )
        second = domaindata.get_store(
            'memory', domaindata.Config({'datadir': str(tmp_path / 'b')})
        )

        assert first is not second

    def test_disk_store(self, disk_config, tmp_path):
        store = domaindata.get_store('disk', disk_config)
        try:
            assert isinstance(store, DiskStore)
            assert store.directory == str(tmp_path / 'disk')
        finally:
            store.close()

    def test_entry_point(self, mocker):
        """Test that unknown names are looked up as entry points"""
        entry_point = mocker.Mock()
        entry_point.load.return_value = lambda name, config: (
            doubles.DictStore()
        )
        entry_points = mocker.patch('domaindata.cache.entry_points',
                                    return_value={'plugin': entry_point})

        store = domaindata.get_store('plugin', domaindata.Config({}))

        assert isinstance(store, doubles.DictStore)
        assert entry_points.call_args == (
            (), {'group': domaindata.cache.ENTRY_POINT_GROUP}
        )
        assert 'plugin' in domaindata.cache.stores

    def test_unknown_store(self, mocker):
        mocker.patch('domaindata.cache.entry_points', return_value={})

        with pytest.raises(domaindata.MisconfiguredExtension):
            domaindata.get_store('nonexistent', domaindata.Config({}))
