"""
Rendering of groups, encounter matrices and session listings.
This module provides the console and printable views used by the CLI.
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

import html
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

from partnerpairing.constants import (
    APP_NAME,
    GROUPS_BOX_WIDTH,
    MATRIX_HEADER_WIDTH,
    MATRIX_SELF_CELL,
    MATRIX_ZERO_CELL,
)
from partnerpairing.exceptions import FileSaveException
from partnerpairing.models.pairing import PairHistory, PairingResult
from partnerpairing.models.session import SessionSummary
from partnerpairing.type_hints import Participant
from partnerpairing.utils import setup_logger

logger = setup_logger(__name__)


def short_label(name: Participant) -> str:
    """Label used in the matrix: the last word of the name."""
    parts = name.split()
    return parts[-1] if parts else name


def format_groups(result: PairingResult, title: str = "NEW GROUPS") -> str:
    """
    Boxed console listing of the groups of a result.

    The solo participant, if any, is listed with the last group.

    Parameters
    ----------
    result : PairingResult
        Result to render
    title : str
        Heading shown in the box

    Returns
    -------
    str
        Multi-line text without trailing newline
    """
    inner = GROUPS_BOX_WIDTH
    lines = [
        "╔" + "═" * inner + "╗",
        "║" + title.center(inner) + "║",
        "╠" + "═" * inner + "╣",
    ]

    for number, group in enumerate(result.groups(), start=1):
        label = f" Group {number:>2}: "
        indent = " " * len(label)
        for position, member in enumerate(group):
            prefix = label if position == 0 else indent
            lines.append("║" + prefix + member)

    lines.append("╚" + "═" * inner + "╝")
    lines.append(f"Total repeat score: {result.total_score}")
    return "\n".join(lines)


def format_matrix(roster: Sequence[Participant], history: PairHistory) -> str:
    """
    Participant by participant grid of previous encounters.

    Rows use the short label of each name, columns its first three
    characters. The diagonal shows ``.`` and pairs that never met show ``-``.
    """
    labels = [short_label(name) for name in roster]
    label_width = max((len(label) for label in labels), default=10)

    header = f"{'':>{label_width}} │"
    for label in labels:
        header += f" {label[:MATRIX_HEADER_WIDTH]:>{MATRIX_HEADER_WIDTH}}"
    lines = [
        header,
        "─" * label_width + "─┼" + "─" * ((MATRIX_HEADER_WIDTH + 1) * len(labels)),
    ]

    for i, row_name in enumerate(roster):
        row = f"{labels[i]:>{label_width}} │"
        for j, column_name in enumerate(roster):
            if i == j:
                cell = MATRIX_SELF_CELL
            else:
                count = history.score(row_name, column_name)
                cell = str(count) if count else MATRIX_ZERO_CELL
            row += f" {cell:>{MATRIX_HEADER_WIDTH}}"
        lines.append(row)

    return "\n".join(lines)


def format_sessions(sessions: List[SessionSummary]) -> str:
    """Table of recorded sessions, oldest first."""
    if not sessions:
        return "No sessions recorded yet."

    lines = [f"{'Session':>7}  {'Saved':<16}  {'People':>6}  {'Pairs':>5}  {'Score':>5}"]
    for session in sessions:
        saved = (
            session.created_at.strftime("%Y-%m-%d %H:%M")
            if session.created_at
            else "unknown"
        )
        lines.append(
            f"{session.session_id:>7}  {saved:<16}  {session.participant_count:>6}"
            f"  {session.pair_count:>5}  {session.total_score:>5}"
        )
    return "\n".join(lines)


def generate_groups_html(
    result: PairingResult,
    title: str = "",
    session_id: Optional[int] = None,
) -> str:
    """
    Generate HTML for a printable group sheet.

    Parameters
    ----------
    result : PairingResult
        Result to print
    title : str
        Optional class or course name shown in the heading
    session_id : int, optional
        Session number shown under the heading

    Returns
    -------
    str
        Complete HTML document for printing
    """
    main_title = "Groups"
    if title:
        main_title += f" - {html.escape(title)}"
    subtitle = f"Session {session_id}" if session_id is not None else ""

    doc = f"""
        <html>
        <head>
            <meta charset="utf-8">
            <style>
                body {{ font-family: Arial, sans-serif; color: #000; background: #fff; margin: 0; padding: 0; }}
                h2 {{ text-align: center; margin: 0 0 0.5em 0; font-size: 1.35em; font-weight: normal; letter-spacing: 0.03em; }}
                .subtitle {{ text-align: center; font-size: 1.05em; margin-bottom: 1.2em; }}
                table.groups {{ border-collapse: collapse; width: 100%; margin: 0 auto 1.5em auto; }}
                table.groups th, table.groups td {{ border: 1px solid #222; padding: 6px 10px; text-align: left; font-size: 11pt; white-space: nowrap; }}
                table.groups th {{ font-weight: bold; background: none; }}
                .footer {{ text-align: center; font-size: 9pt; margin-top: 2em; color: #888; letter-spacing: 0.04em; }}
            </style>
        </head>
        <body>
            <h2>{main_title}</h2>
            <div class="subtitle">{subtitle}</div>
            <table class="groups">
                <tr>
                    <th style="width:7%;">#</th>
                    <th style="width:93%;">Members</th>
                </tr>
        """

    for number, group in enumerate(result.groups(), start=1):
        members = ", ".join(html.escape(member) for member in group)
        doc += f"<tr><td>{number}</td><td>{members}</td></tr>"

    doc += f"""
            </table>
            <div class="footer">
                Printed by {APP_NAME} &mdash; {datetime.now().strftime('%Y-%m-%d %H:%M')}
            </div>
        </body>
        </html>
        """

    return doc


def save_groups_html(
    result: PairingResult,
    output_path: Union[str, Path],
    title: str = "",
    session_id: Optional[int] = None,
) -> Path:
    """Write :func:`generate_groups_html` output to ``output_path``."""
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(generate_groups_html(result, title, session_id))
    except OSError as e:
        raise FileSaveException(f"Cannot write {output_path}: {e}") from e

    logger.info("Group sheet saved to: %s", output_path)
    return output_path
