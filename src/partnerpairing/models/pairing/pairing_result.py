"""PairingResult data class."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from partnerpairing.models.pairing.pair_key import canonicalize
from partnerpairing.type_hints import Group, Pair, PairKey, Participant


@dataclass(slots=True)
class PairingResult:
    """Best partition found by a generation run.

    Attributes
    ----------
    pairs : list of tuple of str
        Real pairs in the order the greedy pass produced them.
    solo : str or None
        Participant left over when the roster size is odd. It scores 0,
        is shown with the last pair as a trio and is never persisted.
    total_score : int
        Sum of the historical counts of every real pair.
    iterations : int
        Search budget that produced this result.
    """

    pairs: List[Pair] = field(default_factory=list)
    solo: Optional[Participant] = None
    total_score: int = 0
    iterations: int = 0

    @property
    def has_trio(self) -> bool:
        return self.solo is not None and bool(self.pairs)

    def participants(self) -> List[Participant]:
        """Every participant covered by the result, pairs first."""
        members = [member for pair in self.pairs for member in pair]
        if self.solo is not None:
            members.append(self.solo)
        return members

    def groups(self) -> List[Group]:
        """Groups for display, the solo merged into the last pair."""
        groups: List[Group] = [tuple(pair) for pair in self.pairs]
        if self.solo is not None:
            if groups:
                groups[-1] = groups[-1] + (self.solo,)
            else:
                groups.append((self.solo,))
        return groups

    def persistable_pairs(self) -> List[PairKey]:
        """Real pairs in canonical form, the solo excluded."""
        return [canonicalize(a, b) for a, b in self.pairs]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the result to dictionary."""
        return {
            "pairs": [list(pair) for pair in self.pairs],
            "solo": self.solo,
            "total_score": self.total_score,
            "iterations": self.iterations,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingResult":
        """Deserialize a result from dictionary."""
        return cls(
            pairs=[(str(a), str(b)) for a, b in data.get("pairs", [])],
            solo=data.get("solo"),
            total_score=int(data.get("total_score", 0)),
            iterations=int(data.get("iterations", 0)),
        )


#  LocalWords:  PairingResult
