"""SQLite storage for the pairing history.

The ``groups`` table keeps one row per real pair, tagged with the id of the
session (``brief_id``) it was made in. The ``sessions`` table adds one row
per saved session with its timestamp and score.
"""

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

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from dateutil.parser import isoparse

from partnerpairing.exceptions import StorageException
from partnerpairing.models.pairing import (
    PairHistory,
    PairingResult,
    PairRecord,
    build_history,
    canonicalize,
)
from partnerpairing.models.session import SessionSummary
from partnerpairing.type_hints import PairKey
from partnerpairing.utils import setup_logger

logger = setup_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS groups (
    id        INTEGER PRIMARY KEY AUTOINCREMENT,
    brief_id  INTEGER NOT NULL,
    member_a  TEXT NOT NULL,
    member_b  TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS sessions (
    brief_id           INTEGER PRIMARY KEY,
    created_at         TEXT NOT NULL,
    total_score        INTEGER NOT NULL,
    participant_count  INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_groups_brief ON groups (brief_id);
"""


class HistoryStore:
    """Persists saved sessions and reads them back as pair records.

    Usable as a context manager; the connection is opened lazily and the
    schema is created on first use.

    Args:
        path: SQLite database file, or ``":memory:"``
    """

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        self._conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "HistoryStore":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self.initialize()
        return self._conn

    def initialize(self) -> None:
        """Open the database and create the tables if needed."""
        if self._conn is not None:
            return
        try:
            self._conn = sqlite3.connect(self.path)
            self._conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            self._conn = None
            raise StorageException(f"Cannot open history database {self.path}: {e}") from e
        logger.debug("Opened history database %s", self.path)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # ----- reading -----

    def load_records(self) -> List[PairRecord]:
        """Every stored pair, oldest session first."""
        try:
            rows = self.connection.execute(
                "SELECT brief_id, member_a, member_b FROM groups ORDER BY brief_id, id"
            ).fetchall()
        except sqlite3.Error as e:
            raise StorageException(f"Cannot read pair records: {e}") from e
        return [PairRecord(int(brief_id), a, b) for brief_id, a, b in rows]

    def load_history(self) -> PairHistory:
        """Aggregate all stored pairs into a :class:`PairHistory`."""
        history = build_history(self.load_records())
        logger.info("Loaded %s distinct pairs from %s", len(history), self.path)
        return history

    def next_session_id(self) -> int:
        """One more than the highest session id so far, or 1."""
        try:
            (next_id,) = self.connection.execute(
                "SELECT COALESCE(MAX(brief_id), 0) + 1 FROM ("
                " SELECT brief_id FROM groups UNION ALL SELECT brief_id FROM sessions"
                ")"
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageException(f"Cannot compute next session id: {e}") from e
        return int(next_id)

    def session_pairs(self, session_id: int) -> List[PairKey]:
        try:
            rows = self.connection.execute(
                "SELECT member_a, member_b FROM groups WHERE brief_id = ? ORDER BY id",
                (session_id,),
            ).fetchall()
        except sqlite3.Error as e:
            raise StorageException(f"Cannot read session {session_id}: {e}") from e
        return [(a, b) for a, b in rows]

    def list_sessions(self) -> List[SessionSummary]:
        """Summaries of every session, oldest first.

        Sessions written by older tools only exist in ``groups``; they are
        listed without timestamp and with a score of 0.
        """
        try:
            rows = self.connection.execute(
                """
                SELECT ids.brief_id,
                       s.created_at,
                       (SELECT COUNT(*) FROM groups g WHERE g.brief_id = ids.brief_id),
                       COALESCE(s.total_score, 0),
                       COALESCE(s.participant_count, 0)
                FROM (SELECT brief_id FROM groups
                      UNION SELECT brief_id FROM sessions) AS ids
                LEFT JOIN sessions s ON s.brief_id = ids.brief_id
                ORDER BY ids.brief_id
                """
            ).fetchall()
        except sqlite3.Error as e:
            raise StorageException(f"Cannot list sessions: {e}") from e

        summaries = []
        for brief_id, created_at, pair_count, total_score, participant_count in rows:
            if not participant_count:
                participant_count = 2 * pair_count
            summaries.append(
                SessionSummary(
                    session_id=int(brief_id),
                    created_at=isoparse(created_at) if created_at else None,
                    pair_count=int(pair_count),
                    total_score=int(total_score),
                    participant_count=int(participant_count),
                )
            )
        return summaries

    # ----- writing -----

    def save_result(
        self,
        result: PairingResult,
        participant_count: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ) -> int:
        """Store the real pairs of ``result`` as a new session.

        The solo participant is not stored. Everything is written in a
        single transaction.

        Returns:
            The id of the new session
        """
        if participant_count is None:
            participant_count = len(result.participants())
        if created_at is None:
            created_at = datetime.now(timezone.utc)

        conn = self.connection
        try:
            with conn:
                session_id = self.next_session_id()
                conn.executemany(
                    "INSERT INTO groups (brief_id, member_a, member_b) VALUES (?, ?, ?)",
                    [(session_id, a, b) for a, b in result.persistable_pairs()],
                )
                conn.execute(
                    "INSERT INTO sessions (brief_id, created_at, total_score, participant_count)"
                    " VALUES (?, ?, ?, ?)",
                    (
                        session_id,
                        created_at.isoformat(),
                        result.total_score,
                        participant_count,
                    ),
                )
        except sqlite3.Error as e:
            raise StorageException(f"Cannot save session: {e}") from e

        logger.info(
            "Saved %s pairs as session %s", len(result.pairs), session_id
        )
        return session_id

    def import_pairs(
        self,
        pairs: List[PairKey],
        participant_count: int,
        created_at: Optional[datetime] = None,
    ) -> int:
        """Store pairs made elsewhere as a new session with a score of 0.

        Returns:
            The id of the new session
        """
        if created_at is None:
            created_at = datetime.now(timezone.utc)

        conn = self.connection
        try:
            with conn:
                session_id = self.next_session_id()
                conn.executemany(
                    "INSERT INTO groups (brief_id, member_a, member_b) VALUES (?, ?, ?)",
                    [(session_id, *canonicalize(a, b)) for a, b in pairs],
                )
                conn.execute(
                    "INSERT INTO sessions (brief_id, created_at, total_score, participant_count)"
                    " VALUES (?, ?, 0, ?)",
                    (session_id, created_at.isoformat(), participant_count),
                )
        except sqlite3.Error as e:
            raise StorageException(f"Cannot import pairs: {e}") from e
        return session_id

    def undo_last_session(self) -> Optional[int]:
        """Delete the most recent session.

        Returns:
            The id of the removed session, or None if there is none
        """
        conn = self.connection
        try:
            with conn:
                (last_id,) = conn.execute(
                    "SELECT MAX(brief_id) FROM ("
                    " SELECT brief_id FROM groups UNION ALL SELECT brief_id FROM sessions"
                    ")"
                ).fetchone()
                if last_id is None:
                    logger.warning("Cannot undo: no sessions recorded")
                    return None
                conn.execute("DELETE FROM groups WHERE brief_id = ?", (last_id,))
                conn.execute("DELETE FROM sessions WHERE brief_id = ?", (last_id,))
        except sqlite3.Error as e:
            raise StorageException(f"Cannot undo last session: {e}") from e

        logger.info("Removed session %s", last_id)
        return int(last_id)
