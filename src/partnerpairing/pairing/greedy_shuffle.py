"""Randomized greedy pairing that minimizes repeat partners."""

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

import math
import random
from typing import List, Optional, Protocol, Sequence, Tuple

from partnerpairing.constants import DEFAULT_ITERATIONS
from partnerpairing.exceptions import (
    InvalidIterationBudgetException,
    InvalidRosterException,
)
from partnerpairing.models.pairing import PairHistory, PairingResult
from partnerpairing.type_hints import Pair, Participant, Roster
from partnerpairing.utils import setup_logger

logger = setup_logger(__name__)


class RandomSource(Protocol):
    """Anything able to shuffle a list in place, e.g. ``random.Random``."""

    def shuffle(self, x: List[Participant]) -> None: ...


def _check_iterations(iterations: int) -> int:
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise InvalidIterationBudgetException(
            f"Iteration budget must be an integer, got {iterations!r}"
        )
    if iterations < 1:
        raise InvalidIterationBudgetException(
            f"Iteration budget must be positive, got {iterations}"
        )
    return iterations


class PairingGenerator:
    """
    Best-of-N randomized greedy pairing.

    Every iteration shuffles the roster, then walks the permutation left to
    right pairing each unmatched participant with the later unmatched
    participant they have met least often. The first partner in scan order
    wins a tie. The candidate with the lowest total repeat score over the
    whole budget is kept.

    Parameters
    ----------
    history : PairHistory
        Read-only counts of previous pairings.
    iterations : int
        Number of shuffles to try, must be positive.
    rng : RandomSource, optional
        Source of permutations. Takes precedence over ``seed``.
    seed : int, optional
        Seed for a private ``random.Random`` when no ``rng`` is given.
    """

    def __init__(
        self,
        history: PairHistory,
        iterations: int = DEFAULT_ITERATIONS,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ):
        self.history = history
        self.iterations = _check_iterations(iterations)
        if rng is not None:
            self.random = rng
        else:
            self.random = random.Random(seed) if seed is not None else random.Random()

    def build_candidate(
        self, pool: Sequence[Participant]
    ) -> Tuple[List[Pair], Optional[Participant], int]:
        """Run one greedy pass over an already shuffled pool.

        Returns
        -------
        tuple
            ``(pairs, solo, total_score)`` where ``solo`` is the participant
            left unmatched on an odd pool, else None.
        """
        size = len(pool)
        used = [False] * size
        pairs: List[Pair] = []
        total_score = 0

        for i in range(size):
            if used[i]:
                continue

            best_j = -1
            best_score = math.inf
            for j in range(i + 1, size):
                if used[j]:
                    continue
                pair_score = self.history.score(pool[i], pool[j])
                if pair_score < best_score:
                    best_score = pair_score
                    best_j = j

            if best_j < 0:
                # Nobody left after i: odd pool
                continue

            used[i] = True
            used[best_j] = True
            total_score += best_score
            pairs.append((pool[i], pool[best_j]))

        solo = next((pool[i] for i in range(size) if not used[i]), None)
        return pairs, solo, total_score

    def generate(self, roster: Roster) -> PairingResult:
        """Search for the partition of ``roster`` with the lowest repeat score.

        Raises:
            InvalidRosterException: If the roster is empty
        """
        if len(roster) == 0:
            raise InvalidRosterException("Cannot generate pairings for an empty roster")

        best_pairs: List[Pair] = []
        best_solo: Optional[Participant] = None
        best_total = math.inf

        for iteration in range(self.iterations):
            pool = list(roster)
            self.random.shuffle(pool)
            pairs, solo, total = self.build_candidate(pool)

            if total < best_total:
                logger.debug(
                    "Iteration %s improved best score from %s to %s",
                    iteration + 1,
                    best_total,
                    total,
                )
                best_total = total
                best_pairs = pairs
                best_solo = solo

        logger.info(
            "Best score %s for %s participants after %s iterations",
            best_total,
            len(roster),
            self.iterations,
        )
        return PairingResult(
            pairs=best_pairs,
            solo=best_solo,
            total_score=int(best_total),
            iterations=self.iterations,
        )


def create_greedy_pairings(
    roster: Roster,
    history: PairHistory,
    iterations: int = DEFAULT_ITERATIONS,
    rng: Optional[RandomSource] = None,
    seed: Optional[int] = None,
) -> PairingResult:
    """Pair ``roster`` for a new session, avoiding repeats in ``history``.

    Convenience wrapper around :class:`PairingGenerator`.
    """
    generator = PairingGenerator(history, iterations=iterations, rng=rng, seed=seed)
    return generator.generate(roster)
