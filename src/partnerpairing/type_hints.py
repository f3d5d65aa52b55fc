"""Type hints used in Partner Pairing."""

from typing import Sequence, Tuple

# A participant is identified by its name
Participant = str
# Ordered list of participants for one session
Roster = Sequence[Participant]
# Unordered pair in canonical form, smaller name first
PairKey = Tuple[Participant, Participant]
# A pair as produced by the generator, in permutation order
Pair = Tuple[Participant, Participant]
# One display group: a pair, or a trio when the solo joins the last pair
Group = Tuple[Participant, ...]

#  LocalWords:  PairKey
