"""Canonical keys for unordered pairs of participants."""

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

from partnerpairing.type_hints import PairKey, Participant


def canonicalize(a: Participant, b: Participant) -> PairKey:
    """Return the order independent key for the pair ``{a, b}``.

    The lexicographically smaller name comes first, so
    ``canonicalize(a, b) == canonicalize(b, a)``.
    """
    if a <= b:
        return (a, b)
    return (b, a)
