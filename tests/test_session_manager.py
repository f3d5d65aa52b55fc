import json

import pytest

from partnerpairing.controllers import SessionManager
from partnerpairing.exceptions import FileLoadException
from partnerpairing.models.session import SessionConfig


@pytest.fixture
def manager(tmp_path):
    roster = tmp_path / "students.json"
    roster.write_text(json.dumps(["Ann", "Bo", "Cy", "Di"]), encoding="utf-8")
    config = SessionConfig(
        roster_path=str(roster),
        database_path=str(tmp_path / "db.sqlite"),
        iterations=50,
        seed=1,
    )
    session_manager = SessionManager(config)
    yield session_manager
    session_manager.close()


def test_create_session_does_not_record(manager):
    result = manager.create_session()

    assert sorted(result.participants()) == ["Ann", "Bo", "Cy", "Di"]
    assert manager.sessions() == []
    assert len(manager.load_history()) == 0


def test_saved_sessions_steer_next_pairs(manager):
    first = manager.create_session()
    assert manager.save_session(first) == 1

    second = manager.create_session()

    assert second.total_score == 0
    assert set(second.persistable_pairs()).isdisjoint(first.persistable_pairs())
    assert manager.save_session(second) == 2
    assert [s.session_id for s in manager.sessions()] == [1, 2]


def test_undo_last_session(manager):
    manager.save_session(manager.create_session())

    assert manager.undo_last_session() == 1
    assert manager.undo_last_session() is None


def test_import_session_counts_every_pair_in_a_group(manager, tmp_path):
    groups = tmp_path / "last_brief.json"
    groups.write_text(json.dumps([["Ann", "Bo", "Cy"]]), encoding="utf-8")

    assert manager.import_session(str(groups)) == 1

    history = manager.load_history()
    assert history.score("Ann", "Bo") == 1
    assert history.score("Bo", "Cy") == 1
    assert history.score("Ann", "Cy") == 1
    assert history.score("Ann", "Di") == 0


def test_imported_trio_lists_its_members(manager, tmp_path):
    groups = tmp_path / "groups.json"
    groups.write_text(json.dumps([["Ann", "Bo"], ["Cy", "Di", "Ed"]]), encoding="utf-8")

    manager.import_session(str(groups))

    (summary,) = manager.sessions()
    assert summary.participant_count == 5
    assert summary.pair_count == 4
    assert summary.created_at is not None


def test_import_rejects_repeated_member(manager, tmp_path):
    groups = tmp_path / "groups.json"
    groups.write_text(json.dumps([["Ann", "Ann"]]), encoding="utf-8")

    with pytest.raises(FileLoadException):
        manager.import_session(str(groups))

    assert manager.store.load_records() == []
    assert manager.sessions() == []


def test_matrix_reflects_saved_session(manager):
    result = manager.create_session()
    manager.save_session(result)

    lines = manager.matrix().splitlines()

    assert len(lines) == 2 + 4
    assert sum(line.count("1") for line in lines[2:]) == 4
