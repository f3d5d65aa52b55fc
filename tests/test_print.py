from datetime import datetime

from partnerpairing.models.pairing import PairingResult, build_history
from partnerpairing.models.session import SessionSummary
from partnerpairing.utils.print import (
    format_groups,
    format_matrix,
    format_sessions,
    generate_groups_html,
    save_groups_html,
    short_label,
)


def test_short_label_uses_last_word():
    assert short_label("Ada King Lovelace") == "Lovelace"
    assert short_label("Cy") == "Cy"


def test_format_groups_lists_trio_in_last_group():
    result = PairingResult(pairs=[("Ann", "Bo"), ("Cy", "Di")], solo="Ed", total_score=2)

    lines = format_groups(result).splitlines()

    assert lines[0].startswith("╔")
    assert "NEW GROUPS" in lines[1]
    assert "║ Group  1: Ann" in lines
    assert "║ Group  2: Cy" in lines
    group_two = lines.index("║ Group  2: Cy")
    assert lines[group_two + 1].strip("║ ") == "Di"
    assert lines[group_two + 2].strip("║ ") == "Ed"
    assert lines[-2].startswith("╚")
    assert lines[-1] == "Total repeat score: 2"


def test_format_matrix():
    roster = ["Ann Lee", "Bo Park", "Cy"]
    history = build_history([("Ann Lee", "Bo Park"), ("Bo Park", "Ann Lee")])

    lines = format_matrix(roster, history).splitlines()

    assert lines[0] == "     │ Lee Par  Cy"
    assert lines[1].startswith("─────┼")
    assert lines[2] == " Lee │   .   2   -"
    assert lines[3] == "Park │   2   .   -"
    assert lines[4] == "  Cy │   -   -   ."


def test_format_sessions():
    assert format_sessions([]) == "No sessions recorded yet."

    text = format_sessions(
        [
            SessionSummary(1, datetime(2025, 1, 2, 8, 15), 3, 0, 7),
            SessionSummary(2, None, 2, 0, 4),
        ]
    )

    assert "2025-01-02 08:15" in text
    assert "unknown" in text
    assert len(text.splitlines()) == 3


def test_html_sheet_escapes_names(tmp_path):
    result = PairingResult(pairs=[("<Ann>", "Bo")], solo="Cy")

    html = generate_groups_html(result, title="Maths & Co", session_id=4)

    assert "&lt;Ann&gt;, Bo, Cy" in html
    assert "Groups - Maths &amp; Co" in html
    assert "Session 4" in html

    path = save_groups_html(result, tmp_path / "out" / "groups.html")
    assert path.read_text(encoding="utf-8").count("<tr>") == 2
