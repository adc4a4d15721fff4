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

"""Parsed forms of the Public Suffix List and the Root Zone Database"""

import datetime
import json
import re
from typing import Any, Dict, Iterable, Iterator, Optional, Union

from tldextract.suffix_list import extract_tlds_from_suffix_list

from .exceptions import CouldNotLoadRules, CouldNotLoadTLDs


class Rules:
    """Public Suffix List rules, split into the ICANN section and the private
    section. Rules are kept exactly as the list writes them, so wildcard
    (``*.ck``) and exception (``!www.ck``) rules keep their markers.

    :param icann: Rules from the ICANN section
    :param private: Rules from the private domains section
    """

    def __init__(self, icann: Iterable[str], private: Iterable[str]):
        self.icann = frozenset(icann)
        self.private = frozenset(private)

    @classmethod
    def from_text(cls, text: str) -> 'Rules':
        """Parse the raw Public Suffix List

        :param text: Contents of ``public_suffix_list.dat``
        :raises CouldNotLoadRules: if the text contains no ICANN rules
        """
        icann, private = extract_tlds_from_suffix_list(text)
        if not icann:
            raise CouldNotLoadRules("The Public Suffix List does not contain "
                                    "any ICANN rules")
        return cls(icann, private)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> 'Rules':
        """Rebuild the rules from :meth:`to_json` output

        :raises CouldNotLoadRules: if the data is not valid
        """
        try:
            obj = json.loads(data)
            return cls(obj['ICANN_DOMAINS'], obj['PRIVATE_DOMAINS'])
        except (ValueError, KeyError, TypeError) as e:
            raise CouldNotLoadRules(f"Cached Public Suffix List is "
                                    f"corrupt: {e}") from e

    def to_json(self) -> str:
        return json.dumps({
            'ICANN_DOMAINS': sorted(self.icann),
            'PRIVATE_DOMAINS': sorted(self.private),
        })

    def __len__(self):
        return len(self.icann) + len(self.private)

    def __eq__(self, other):
        if not isinstance(other, Rules):
            return NotImplemented
        return self.icann == other.icann and self.private == other.private

    def __repr__(self):
        return (f"<Rules: {len(self.icann)} ICANN, {len(self.private)} "
                "private>")


# First line of tlds-alpha-by-domain.txt, e.g.
# "# Version 2023111800, Last Updated Sat Nov 18 07:07:01 2023 UTC"
_RZD_HEADER_RE = re.compile(
    r'^#\s*Version\s+(?P<version>\d+),\s*Last Updated\s+(?P<date>.+?)\s*$'
)
_RZD_DATE_FORMAT = '%a %b %d %H:%M:%S %Y %Z'
_TLD_RE = re.compile(r'^[a-z0-9-]+$')


def _to_alabel(label: str) -> Optional[str]:
    """Convert a TLD to its lowercase A-label form, or ``None`` if it cannot
    be a TLD"""
    label = label.strip().rstrip('.').lower()
    try:
        label = label.encode('idna').decode('ascii')
    except UnicodeError:
        return None
    if not _TLD_RE.match(label):
        return None
    return label


class TopLevelDomains:
    """The IANA Root Zone Database list of top level domains

    :param records: TLDs in lowercase A-label form
    :param version: List version, as given in the list header
    :param modified_date: When IANA last updated the list
    """

    def __init__(self, records: Iterable[str], version: str,
                 modified_date: datetime.datetime):
        self.records = tuple(records)
        self.version = version
        self.modified_date = modified_date
        self._lookup = frozenset(self.records)

    @classmethod
    def from_text(cls, text: str) -> 'TopLevelDomains':
        """Parse the raw ``tlds-alpha-by-domain.txt`` list

        :raises CouldNotLoadTLDs: if the header or any record is malformed
        """
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if not lines:
            raise CouldNotLoadTLDs("The Root Zone Database is empty")

        match = _RZD_HEADER_RE.match(lines[0])
        if match is None:
            raise CouldNotLoadTLDs("The Root Zone Database header is "
                                   f"malformed: {lines[0]!r}")
        try:
            modified_date = datetime.datetime.strptime(
                match.group('date'), _RZD_DATE_FORMAT
            ).replace(tzinfo=datetime.timezone.utc)
        except ValueError as e:
            raise CouldNotLoadTLDs("The Root Zone Database date is "
                                   f"malformed: {e}") from e

        records = []
        for line in lines[1:]:
            if line.startswith('#'):
                continue
            tld = _to_alabel(line)
            if tld is None:
                raise CouldNotLoadTLDs(f"Invalid TLD in the Root Zone "
                                       f"Database: {line!r}")
            records.append(tld)
        if not records:
            raise CouldNotLoadTLDs("The Root Zone Database does not contain "
                                   "any TLD")

        return cls(records, match.group('version'), modified_date)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> 'TopLevelDomains':
        """Rebuild the list from :meth:`to_json` output

        :raises CouldNotLoadTLDs: if the data is not valid
        """
        try:
            obj: Dict[str, Any] = json.loads(data)
            return cls(
                obj['records'],
                obj['version'],
                datetime.datetime.fromisoformat(obj['modifiedDate']),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise CouldNotLoadTLDs(f"Cached Root Zone Database is "
                                   f"corrupt: {e}") from e

    def to_json(self) -> str:
        return json.dumps({
            'version': self.version,
            'modifiedDate': self.modified_date.isoformat(),
            'records': list(self.records),
        })

    def __contains__(self, tld):
        if not isinstance(tld, str):
            return False
        return _to_alabel(tld) in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self.records)

    def __len__(self):
        return len(self.records)

    def __eq__(self, other):
        if not isinstance(other, TopLevelDomains):
            return NotImplemented
        return (self.records == other.records and
                self.version == other.version and
                self.modified_date == other.modified_date)

    def __repr__(self):
        return (f"<TopLevelDomains version {self.version}: "
                f"{len(self.records)} TLDs>")
