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

import datetime
import errno
import io

import pytest

import domaindata
import domaindata.configuration
from domaindata.configuration import parse_ttl


class BrokenFile:
    def __iter__(self):
        raise OSError(errno.ETIMEDOUT, "timeout")

    def readline(self):
        raise OSError(errno.ETIMEDOUT, "timeout")


@pytest.fixture
def configfile_factory(tmp_path):
    """Fixture creating a factory for temporary config files"""
    def factory(contents):
        filename = tmp_path / 'config.ini'
        with open(filename, 'w') as f:
            for line in contents.splitlines():
                print(line.strip(), file=f)
        return filename
    return factory


def test_nonexistent_file(tmp_path):
    """Test opening a nonexistent path raises ConfigError"""
    with pytest.raises(domaindata.ConfigError):
        domaindata.configuration.read_file_from_path(
            tmp_path / 'nonexistent_config.ini'
        )


def test_read_file_read_error():
    """Test read error for read_file"""
    with pytest.raises(domaindata.ConfigError):
        domaindata.configuration.read_file(BrokenFile())


def test_read_file_syntax_error():
    """Test a malformed INI file raises ConfigError"""
    with pytest.raises(domaindata.ConfigError):
        domaindata.configuration.read_file(io.StringIO("no section here\n"))


def test_config_keys(configfile_factory):
    """Test that a configuration file is read into the right options"""
    filename = configfile_factory(
        """[domaindata]
        cache_client = disk
        http_client = guzzle
        cache_ttl = 2 days
        url_psl = https://psl.example/list.dat

        [domaindata.http_client_options]
        timeout = 5
        """
    )

    config = domaindata.configuration.read_file_from_path(filename)

    assert config.cache_client == 'disk'
    assert config.http_client == 'guzzle'
    assert config.cache_ttl == 172800
    assert config.url_psl == 'https://psl.example/list.dat'
    assert config.url_rzd == domaindata.configuration.RZD_URL
    assert config.http_client_options == {'timeout': '5'}


def test_unknown_section(configfile_factory):
    """Test that sections other than the two known ones are rejected"""
    filename = configfile_factory(
        """[domaindata]
        cache_client = disk

        [something_else]
        key = value
        """
    )

    with pytest.raises(domaindata.ConfigError):
        domaindata.configuration.read_file_from_path(filename)


def test_defaults():
    """Test the defaults for every optional option"""
    config = domaindata.Config({})

    assert config.url_psl == domaindata.configuration.PSL_URL
    assert config.url_rzd == domaindata.configuration.RZD_URL
    assert config.cache_ttl is None
    assert config.cache_client is None
    assert config.http_client is None
    assert config.http_client_options == {}
    assert config.datadir == domaindata.configuration.DEFAULT_DATA_DIR


def test_none_treated_as_missing():
    """Test that options set to None fall back to their defaults"""
    config = domaindata.Config({'url_psl': None, 'http_client_options': None})

    assert config.url_psl == domaindata.configuration.PSL_URL
    assert config.http_client_options == {}


@pytest.mark.parametrize('value', ['timeout=5', ['timeout'], 5])
def test_http_client_options_not_mapping(value):
    """Test that http_client_options must be a mapping"""
    config = domaindata.Config({'http_client_options': value})
    with pytest.raises(domaindata.MisconfiguredExtension):
        config.http_client_options


def test_config_reads_mapping_every_time():
    """Test that changes to the mapping are visible without rebuilding the
    Config"""
    options = {'http_client': 'curl'}
    config = domaindata.Config(options)
    assert config.http_client == 'curl'

    options['http_client'] = 'guzzle'

    assert config.http_client == 'guzzle'


def test_relative_datadir():
    """Test that a relative datadir is rejected"""
    config = domaindata.Config({'datadir': 'relative/dir'})
    with pytest.raises(domaindata.ConfigError):
        config.datadir


@pytest.mark.parametrize('value', ['soon', '-5', 'five days', [1]])
def test_invalid_cache_ttl(value):
    """Test that a malformed cache_ttl raises ConfigError when read"""
    config = domaindata.Config({'cache_ttl': value})
    with pytest.raises(domaindata.ConfigError):
        config.cache_ttl


@pytest.mark.parametrize('value, expected', [
    (None, None),
    (0, 0),
    (3600, 3600),
    (90.5, 90),
    (datetime.timedelta(days=1), 86400),
    ('86400', 86400),
    (' 120 ', 120),
    ('7 days', 604800),
    ('1 day', 86400),
    ('12h', 43200),
    ('30 minutes', 1800),
    ('2 Weeks', 1209600),
    ('45s', 45),
    ('3 hrs', 10800),
    ('10 secs', 10),
])
def test_parse_ttl(value, expected):
    assert parse_ttl(value) == expected


@pytest.mark.parametrize('value', [True, [60], object()])
def test_parse_ttl_wrong_type(value):
    with pytest.raises(TypeError):
        parse_ttl(value)


@pytest.mark.parametrize('value', ['', 'tomorrow', '5 fortnights', '5 ms',
                                   '2 hs', -1,
                                   datetime.timedelta(seconds=-1)])
def test_parse_ttl_invalid(value):
    with pytest.raises(ValueError):
        parse_ttl(value)
