"""Data models for the history of past pairings."""

# Partner Pairing
# Copyright (C) 2025  Partner Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Tuple, Union

from partnerpairing.models.pairing.pair_key import canonicalize
from partnerpairing.type_hints import PairKey, Participant


@dataclass(frozen=True)
class PairRecord:
    """A single persisted pairing.

    Attributes
    ----------
    session_id : int
        Identifier of the session the pair was made in.
    member_a : str
        First participant of the pair.
    member_b : str
        Second participant of the pair.
    """

    session_id: int
    member_a: Participant
    member_b: Participant

    @property
    def key(self) -> PairKey:
        return canonicalize(self.member_a, self.member_b)


RecordLike = Union[PairRecord, Tuple[Participant, Participant]]


@dataclass(frozen=True)
class PairHistory:
    """
    Counts how often each pair of participants has been paired before.

    The history is built once per run and is read-only afterwards; the
    generator receives it as a parameter.

    Attributes
    ----------
    counts : mapping of tuple of str to int
        Read-only mapping from canonical pair key to the number of prior
        sessions the pair shared. Pairs never seen are absent.
    """

    counts: Mapping[PairKey, int] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if not isinstance(self.counts, MappingProxyType):
            object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))

    @classmethod
    def empty(cls) -> "PairHistory":
        return cls()

    def score(self, a: Participant, b: Participant) -> int:
        """Number of times ``a`` and ``b`` have been paired, 0 if never."""
        return self.counts.get(canonicalize(a, b), 0)

    def __len__(self) -> int:
        return len(self.counts)

    def __iter__(self) -> Iterator[PairKey]:
        return iter(self.counts)

    def __contains__(self, key: object) -> bool:
        return key in self.counts

    @property
    def total_pairings(self) -> int:
        """Total number of pair records aggregated into this history."""
        return sum(self.counts.values())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pair history to dictionary."""
        return {
            "pair_counts": [[a, b, count] for (a, b), count in sorted(self.counts.items())]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairHistory":
        """Deserialize pair history from dictionary."""
        counts: Dict[PairKey, int] = {}
        for a, b, count in data.get("pair_counts", []):
            if int(count) > 0:
                key = canonicalize(str(a), str(b))
                counts[key] = counts.get(key, 0) + int(count)
        return cls(counts=counts)


def build_history(records: Iterable[RecordLike]) -> PairHistory:
    """Aggregate past pair records into a :class:`PairHistory`.

    Parameters
    ----------
    records : iterable
        ``PairRecord`` instances or plain ``(a, b)`` tuples. The order of
        the two members does not matter.

    Returns
    -------
    PairHistory
        Occurrence count per canonical pair key.
    """
    counter: Counter = Counter()
    for record in records:
        if isinstance(record, PairRecord):
            counter[record.key] += 1
        else:
            a, b = record
            counter[canonicalize(a, b)] += 1
    return PairHistory(counts=dict(counter))


def score(history: PairHistory, a: Participant, b: Participant) -> int:
    """Return how many times ``a`` and ``b`` were paired in ``history``."""
    return history.score(a, b)
