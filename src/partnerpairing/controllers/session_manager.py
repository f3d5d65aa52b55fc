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

from itertools import combinations
from typing import List, Optional

from partnerpairing.models.pairing import PairHistory, PairingResult
from partnerpairing.models.session import SessionConfig, SessionSummary
from partnerpairing.pairing import RandomSource, create_greedy_pairings
from partnerpairing.storage import HistoryStore
from partnerpairing.type_hints import Participant
from partnerpairing.utils import setup_logger
from partnerpairing.utils.print import format_matrix
from partnerpairing.utils.roster_loader import load_groups, load_roster

logger = setup_logger(__name__)


class SessionManager:
    """Drives one generate-then-record cycle.

    This class is responsible for:
    - Loading the roster and the pairing history
    - Generating the pairs for a new session
    - Recording a session as an explicit, separate step
    - Undoing the last recorded session
    """

    def __init__(
        self,
        config: SessionConfig,
        store: Optional[HistoryStore] = None,
        rng: Optional[RandomSource] = None,
    ):
        """Initialize the session manager.

        Args:
            config: Session settings
            store: History store, opened from ``config.database_path`` if omitted
            rng: Optional random source, overrides ``config.seed``
        """
        self.config = config
        self.store = store if store is not None else HistoryStore(config.database_path)
        self.rng = rng
        self._roster: Optional[List[Participant]] = None

    def close(self) -> None:
        self.store.close()

    @property
    def roster(self) -> List[Participant]:
        if self._roster is None:
            self._roster = self.load_roster()
        return self._roster

    def load_roster(self) -> List[Participant]:
        roster = load_roster(self.config.roster_path)
        self._roster = roster
        return roster

    def load_history(self) -> PairHistory:
        return self.store.load_history()

    def create_session(self) -> PairingResult:
        """Generate the pairs for the next session without recording them.

        Returns:
            Best result found within the configured iteration budget
        """
        roster = self.roster
        history = self.load_history()

        logger.info(
            "Generating session for %s participants (%s iterations)",
            len(roster),
            self.config.iterations,
        )
        return create_greedy_pairings(
            roster,
            history,
            iterations=self.config.iterations,
            rng=self.rng,
            seed=self.config.seed,
        )

    def save_session(self, result: PairingResult) -> int:
        """Record ``result`` in the history and return its session id."""
        session_id = self.store.save_result(result, len(result.participants()))
        logger.info("Session %s recorded", session_id)
        return session_id

    def import_session(self, path: str) -> int:
        """Record a grouping made elsewhere as a new session.

        Every two members of a group count as having been paired.
        """
        groups = load_groups(path)
        pairs = [pair for group in groups for pair in combinations(group, 2)]
        members = sum(len(group) for group in groups)
        session_id = self.store.import_pairs(pairs, members)
        logger.info(
            "Imported %s groups (%s pairs) as session %s",
            len(groups),
            len(pairs),
            session_id,
        )
        return session_id

    def undo_last_session(self) -> Optional[int]:
        return self.store.undo_last_session()

    def sessions(self) -> List[SessionSummary]:
        return self.store.list_sessions()

    def matrix(self) -> str:
        """Encounter matrix of the roster against the stored history."""
        return format_matrix(self.roster, self.load_history())
