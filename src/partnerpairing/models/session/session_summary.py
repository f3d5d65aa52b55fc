"""SessionSummary data class."""

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

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SessionSummary:
    """One recorded session as listed by the history command.

    Attributes:
        session_id: Monotonically increasing session identifier
        created_at: When the session was saved, None for sessions imported
            without a timestamp
        pair_count: Number of real pairs stored for the session
        total_score: Repeat score of the session when it was generated
        participant_count: Roster size of the session
    """

    session_id: int
    created_at: Optional[datetime]
    pair_count: int
    total_score: int
    participant_count: int
